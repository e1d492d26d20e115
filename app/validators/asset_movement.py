from dataclasses import dataclass

MOVEMENT_PURPOSES = ("Issue", "Receipt", "Transfer")


@dataclass(frozen=True)
class MovementRule:
    required: tuple[str, ...]
    forbidden: tuple[str, ...]
    hint: str


MOVEMENT_RULES = {
    "Issue": MovementRule(
        required=("from_location", "to_employee"),
        forbidden=("to_location",),
        hint="cannot issue to a location. Use to_employee instead",
    ),
    "Receipt": MovementRule(
        required=("from_employee", "to_location"),
        forbidden=("from_location",),
        hint="cannot receive from a location. Use from_employee instead",
    ),
    "Transfer": MovementRule(
        required=("from_location", "to_location"),
        forbidden=("from_employee", "to_employee"),
        hint="cannot use employee fields. Use from_location and to_location only",
    ),
}


def field_value(payload, key):
    if isinstance(payload, dict):
        return payload.get(key)
    return getattr(payload, key, None)


def validate_asset_movement(purpose, assets) -> None:
    """Check every asset line against the purpose's required/forbidden fields.

    Lines may be dicts or objects exposing the same attributes. Raises
    ``ValueError`` with a message naming the first violation.
    """
    if not purpose:
        raise ValueError("Movement purpose is required")
    rule = MOVEMENT_RULES.get(purpose)
    if rule is None:
        raise ValueError(f"Purpose must be one of: {', '.join(MOVEMENT_PURPOSES)}")
    if not assets:
        raise ValueError("At least one asset is required in the assets array")

    for line in assets:
        if not field_value(line, "asset"):
            raise ValueError("Each asset must have an asset ID")
        for field in rule.required:
            if not field_value(line, field):
                raise ValueError(f"For {purpose} purpose, {field} is required for each asset")
        for field in rule.forbidden:
            if field_value(line, field):
                raise ValueError(f"For {purpose} purpose, {rule.hint}")
