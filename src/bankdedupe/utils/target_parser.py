"""Parsing of operator target lists such as ``all`` or ``12,15,DE89...``."""

from bankdedupe.domain.entities import TargetSelection

ALL = "all"


def parse_targets(value: str | None) -> TargetSelection:
    """Parse a comma separated target list.

    ``all`` selects every finding of the relevant bucket. Numeric tokens are
    reference IDs; zero, negative and blank tokens are dropped. Any other
    token is taken as a reference value.

    Args:
        value: Raw option value, may be None

    Returns:
        TargetSelection (empty when nothing usable was given)
    """
    if value is None:
        return TargetSelection()
    value = value.strip()
    if value.lower() == ALL:
        return TargetSelection.all()

    items: list[int | str] = []
    for token in value.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            reference_id = int(token)
        except ValueError:
            items.append(token)
            continue
        if reference_id > 0:
            items.append(reference_id)
    return TargetSelection.of(items)
