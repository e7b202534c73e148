import logging

from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes

from whichcard.agents.orchestrator import RecommendationOrchestrator
from whichcard.config import settings
from whichcard.domain.catalog import GROUP_LABELS, search_categories
from whichcard.domain.models import CardResult, RewardType
from whichcard.exceptions import WhichCardError
from whichcard.logging import setup_logging
from whichcard.nlp.parser import parse_purchase_command
from whichcard.repository.settings_store import SettingsStore
from whichcard.schemas.requests import RecommendRequest
from whichcard.schemas.responses import RecommendResponse

logger = logging.getLogger(__name__)

orchestrator = RecommendationOrchestrator(SettingsStore(settings.card_settings_file))


def _format_reward(result: CardResult) -> str:
    line = f"AED {result.reward_value_aed:.2f}"
    if result.reward_type == RewardType.POINTS and result.raw_points is not None:
        line += f" ({result.raw_points:.0f} pts)"
    return line


def format_reply(payload: RecommendResponse) -> str:
    purchase = payload.purchase
    lines = [f"Purchase: AED {purchase.amount_aed:.2f} / {purchase.category.value} / {purchase.channel.value}"]

    best = payload.best_card
    if best is None:
        lines.append("No enabled card earns a reward on this purchase.")
        return "\n".join(lines)

    lines.append(f"Best card: {best.card_name}")
    lines.append(f"Reward: {_format_reward(best)} ({best.effective_rate * 100:.2f}% back)")
    lines.append(best.note)
    lines.append("All cards:")
    lines.extend(
        f"- {item.card_name}: {_format_reward(item)} ({item.effective_rate * 100:.2f}%)"
        for item in payload.ranked_cards
    )
    return "\n".join(lines)


def format_categories(query: str) -> str:
    options = search_categories(query)
    if not options:
        return f"No categories match '{query}'."
    lines = []
    for option in options:
        lines.append(f"{option.value.value} - {option.label} [{GROUP_LABELS[option.group]}]")
    return "\n".join(lines)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(
        "Send /best <amount> <category> [online|wallet|pos] [intl], e.g. '/best 250 dining' "
        "or '/best 1200 travel_air online intl'. Use /categories to search categories."
    )


async def best(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    text = update.message.text or ""
    try:
        purchase = parse_purchase_command(text)
        result = orchestrator.recommend(RecommendRequest(purchase=purchase))
        await update.message.reply_text(format_reply(result))
    except WhichCardError as exc:
        await update.message.reply_text(f"Parse failed: {exc}")


async def categories(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = " ".join(context.args or [])
    await update.message.reply_text(format_categories(query))


def main() -> None:
    if not settings.telegram_bot_token:
        raise ValueError("TELEGRAM_BOT_TOKEN is required.")

    setup_logging(settings.log_level, settings.log_format)
    app = Application.builder().token(settings.telegram_bot_token).build()
    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("best", best))
    app.add_handler(CommandHandler("categories", categories))

    logger.info("Starting Telegram bot")
    app.run_polling()


if __name__ == "__main__":
    main()
