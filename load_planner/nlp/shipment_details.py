"""Secondary shipment details: description, locations and dates.

These fields help the surrounding system pre-fill a quote. They are
raw strings as written in the request and never affect confidence;
pickup and delivery dates are also normalized to ISO dates when
dateparser can read them.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .dates import normalize_date

_SUBJECT_RE = re.compile(r"^[ \t]*subject[ \t]*:[ \t]*(?P<value>.+)$", re.IGNORECASE | re.MULTILINE)
_REPLY_PREFIX_RE = re.compile(r"^(?:(?:re|fwd?)[ \t]*:[ \t]*)+", re.IGNORECASE)
_QUOTE_PREFIX_RE = re.compile(
    r"^(?:(?:rate|quote|freight)[ \t]+)?(?:quote|request|quote[ \t]+request)[ \t]*(?:for)?[ \t]*[-:–][ \t]*",
    re.IGNORECASE,
)
_CARGO_LABEL_RE = re.compile(
    r"^[ \t]*(?:equipment|cargo|item|commodity|description|freight)[ \t]*:[ \t]*(?P<value>.+)$",
    re.IGNORECASE | re.MULTILINE,
)
_GREETING_RE = re.compile(
    r"^(?:hi|hello|hey|dear|good\s+(?:morning|afternoon|evening)|greetings|thanks|thank\s+you)\b",
    re.IGNORECASE,
)
_HEADER_LINE_RE = re.compile(r"^[\w .\-]{1,30}:", re.IGNORECASE)

_ORIGIN_LINE_RE = re.compile(
    r"^[ \t]*(?:from|origin|pick[ \t-]?up(?:[ \t]+location)?|ship[ \t]+from|load(?:ing)?[ \t]+at)"
    r"[ \t]*:[ \t]*(?P<value>.+)$",
    re.IGNORECASE | re.MULTILINE,
)
_DESTINATION_LINE_RE = re.compile(
    r"^[ \t]*(?:to|destination|deliver(?:y)?(?:[ \t]+(?:location|to))?|drop(?:[ \t-]?off)?|ship[ \t]+to|consignee)"
    r"[ \t]*:[ \t]*(?P<value>.+)$",
    re.IGNORECASE | re.MULTILINE,
)
_INLINE_ROUTE_RE = re.compile(
    r"\bfrom\s+(?P<origin>[A-Z][A-Za-z .'-]*?,\s*[A-Z]{2})\s+to\s+(?P<destination>[A-Z][A-Za-z .'-]*?,\s*[A-Z]{2})\b"
)

_MONTHS = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?"
_DATE = (
    r"(?P<date>\d{1,2}/\d{1,2}(?:/\d{2,4})?"
    r"|\d{4}-\d{2}-\d{2}"
    rf"|{_MONTHS}[ \t]+\d{{1,2}}(?:st|nd|rd|th)?(?:,?[ \t]*\d{{4}})?"
    r"|(?:mon|tues|wednes|thurs|fri|satur|sun)day"
    r"|today|tomorrow|asap|next[ \t]+week)"
)
_PICKUP_DATE_RE = re.compile(
    rf"\b(?:pick[ \t-]?up|ship(?:ping)?|load(?:ing)?|ready)(?:[ \t]+date)?[ \t]*(?:on|by|:|-)?[ \t]*{_DATE}",
    re.IGNORECASE,
)
_DELIVERY_DATE_RE = re.compile(
    rf"\b(?:deliver(?:y|ed)?|drop[ \t-]?off|due|needed[ \t]+by|arrive|arrival)(?:[ \t]+date)?[ \t]*(?:on|by|:|-)?[ \t]*{_DATE}",
    re.IGNORECASE,
)

MAX_DESCRIPTION_LENGTH = 100


@dataclass(frozen=True)
class ShipmentDetails:
    description: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    pickup_date: Optional[str] = None
    delivery_date: Optional[str] = None
    pickup_date_iso: Optional[str] = None
    delivery_date_iso: Optional[str] = None


def _clean(value: str) -> Optional[str]:
    value = value.strip().strip(".,;")
    return value[:MAX_DESCRIPTION_LENGTH] or None


def extract_description(text: str) -> Optional[str]:
    """Find a short cargo description.

    The subject line wins (reply and quote-request prefixes removed),
    then an ``Equipment:``/``Cargo:`` label, then the first line that is
    neither a greeting nor a ``Label:`` header.
    """
    subject = _SUBJECT_RE.search(text)
    if subject:
        value = _REPLY_PREFIX_RE.sub("", subject.group("value").strip())
        value = _QUOTE_PREFIX_RE.sub("", value)
        cleaned = _clean(value)
        if cleaned:
            return cleaned

    label = _CARGO_LABEL_RE.search(text)
    if label:
        return _clean(label.group("value"))

    for line in text.splitlines():
        line = line.strip()
        if len(line) < 3 or _GREETING_RE.match(line) or _HEADER_LINE_RE.match(line):
            continue
        if not re.search(r"[A-Za-z]", line):
            continue
        return _clean(line)
    return None


def _location(regex: "re.Pattern[str]", text: str) -> Optional[str]:
    for match in regex.finditer(text):
        value = match.group("value")
        # Email headers (From:/To:) carry addresses, not places.
        if "@" in value:
            continue
        return _clean(value)
    return None


def extract_shipment_details(text: str) -> ShipmentDetails:
    """Extract description, origin/destination and raw pickup/delivery dates.

    Parameters
    ----------
    text:
        The raw request text.

    Returns
    -------
    ShipmentDetails
        Fields not found (or dates that do not parse) are None.
    """
    origin = _location(_ORIGIN_LINE_RE, text)
    destination = _location(_DESTINATION_LINE_RE, text)
    if origin is None or destination is None:
        inline = _INLINE_ROUTE_RE.search(text)
        if inline:
            origin = origin or inline.group("origin").strip()
            destination = destination or inline.group("destination").strip()

    pickup = _PICKUP_DATE_RE.search(text)
    delivery = _DELIVERY_DATE_RE.search(text)
    pickup_date = pickup.group("date") if pickup else None
    delivery_date = delivery.group("date") if delivery else None

    return ShipmentDetails(
        description=extract_description(text),
        origin=origin,
        destination=destination,
        pickup_date=pickup_date,
        delivery_date=delivery_date,
        pickup_date_iso=normalize_date(pickup_date),
        delivery_date_iso=normalize_date(delivery_date),
    )
