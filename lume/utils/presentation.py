import datetime
import logging
import typing

from lume.artifact_types import get_artifact_type

__all__ = [
    'format_artifact_date',
    'get_artifact_icon',
    'get_artifact_title',
]


UNKNOWN_TITLE = 'Unknown Artifact'
DEFAULT_ICON = 'file'
RELATIVE_DATE_LIMIT = datetime.timedelta(hours=24)


def _get_field(artifact: typing.Any, name: str) -> typing.Any:
    if isinstance(artifact, typing.Mapping):
        return artifact.get(name)
    return getattr(artifact, name, None)


def get_artifact_title(artifact: typing.Any) -> str:
    spec = get_artifact_type(_get_field(artifact, 'type'))
    if spec is None:
        return UNKNOWN_TITLE
    content = _get_field(artifact, 'content')
    title = None
    if isinstance(content, dict):
        title = spec.title_getter(content)
    return title or spec.default_title


def get_artifact_icon(type_: str) -> str:
    spec = get_artifact_type(type_)
    return spec.icon if spec else DEFAULT_ICON


def _to_utc(value: typing.Union[datetime.datetime, str]) -> datetime.datetime:
    if isinstance(value, str):
        value = datetime.datetime.fromisoformat(value.replace('Z', '+00:00'))
    if not isinstance(value, datetime.datetime):
        raise TypeError(f'Unsupported date value: {value!r}')
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def _plural(count: int, unit: str) -> str:
    return f'{count} {unit}' if count == 1 else f'{count} {unit}s'


def _describe_distance(delta: datetime.timedelta) -> str:
    seconds = int(abs(delta.total_seconds()))
    if seconds < 30:
        return 'less than a minute'
    minutes = round(seconds / 60)
    if minutes < 45:
        return _plural(max(minutes, 1), 'minute')
    if minutes < 90:
        return 'about 1 hour'
    return f'about {_plural(round(minutes / 60), "hour")}'


def _format_absolute(value: datetime.datetime) -> str:
    hour = value.hour % 12 or 12
    meridiem = 'AM' if value.hour < 12 else 'PM'
    return (
        f'{value.strftime("%b")} {value.day}, {value.year} '
        f'at {hour}:{value.minute:02d} {meridiem}'
    )


def format_artifact_date(
    value: typing.Union[datetime.datetime, str],
    now: typing.Optional[datetime.datetime] = None,
) -> str:
    """
    Formats artifact timestamp for display.

    Timestamps younger than 24 hours are shown as relative time
    ("5 minutes ago"), older ones as "Dec 12, 2025 at 3:45 PM".
    Naive datetimes are treated as UTC.
    """
    try:
        moment = _to_utc(value)
        current = _to_utc(now) if now else datetime.datetime.now(
            datetime.timezone.utc
        )
    except (TypeError, ValueError):
        logging.warning('Cannot format artifact date: %r', value)
        return 'Unknown date'
    delta = current - moment
    if delta < RELATIVE_DATE_LIMIT:
        distance = _describe_distance(delta)
        if delta < datetime.timedelta(0):
            return f'in {distance}'
        return f'{distance} ago'
    return _format_absolute(moment)
