from collections.abc import Mapping

from pydantic import BaseModel, Field

_SENSITIVE_HEADER_PARTS = ("cookie", "authorization", "oidc-token", "signature")

# Checked in order; comma-separated lists use their first entry.
_IP_HEADERS = ("cf-connecting-ip", "x-forwarded-for", "x-real-ip", "x-vercel-forwarded-for")


class GpsLocation(BaseModel):
    latitude: float
    longitude: float
    accuracy: float
    altitude: float | None = None
    heading: float | None = None
    speed: float | None = None


def _header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _to_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def resolve_client_ip(headers: Mapping[str, str]) -> str | None:
    for name in _IP_HEADERS:
        value = _header(headers, name)
        if value:
            return value.split(",")[0].strip()
    return None


def loggable_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        key: value
        for key, value in headers.items()
        if not any(part in key.lower() for part in _SENSITIVE_HEADER_PARTS)
    }


class RequestMetadata(BaseModel):
    ip: str | None = None
    user_agent: str | None = None
    referer: str | None = None
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_headers(cls, headers: Mapping[str, str], gps: GpsLocation | None = None) -> "RequestMetadata":
        """Collect request context for a card_requests row.

        ``headers`` must be case-insensitive or lower-cased (Starlette's
        ``Headers`` is). Precise browser GPS, when supplied, takes precedence
        over IP geolocation for latitude and longitude.
        """
        country = _header(headers, "cf-ipcountry") or _header(headers, "x-vercel-ip-country")
        region = _header(headers, "x-vercel-ip-country-region")
        city = _header(headers, "x-vercel-ip-city")
        ip_latitude = _header(headers, "x-vercel-ip-latitude")
        ip_longitude = _header(headers, "x-vercel-ip-longitude")

        location_parts = [part for part in (city, region, country) if part]

        logged = loggable_headers(headers)
        if ip_latitude and ip_longitude:
            logged["_ip_geo_latitude"] = ip_latitude
            logged["_ip_geo_longitude"] = ip_longitude

        if gps is not None:
            logged["_gps_latitude"] = str(gps.latitude)
            logged["_gps_longitude"] = str(gps.longitude)
            logged["_gps_accuracy_meters"] = str(gps.accuracy)
            for name in ("altitude", "speed", "heading"):
                value = getattr(gps, name)
                if value is not None:
                    logged[f"_gps_{name}"] = str(value)

        for source, target in (
            ("x-vercel-ip-timezone", "_ip_timezone"),
            ("x-vercel-ip-continent", "_ip_continent"),
            ("x-vercel-ip-as-number", "_ip_as_number"),
        ):
            value = _header(headers, source)
            if value:
                logged[target] = value

        return cls(
            ip=resolve_client_ip(headers),
            user_agent=_header(headers, "user-agent"),
            referer=_header(headers, "referer"),
            location=", ".join(location_parts) if location_parts else None,
            latitude=gps.latitude if gps is not None else _to_float(ip_latitude),
            longitude=gps.longitude if gps is not None else _to_float(ip_longitude),
            headers=logged,
        )
