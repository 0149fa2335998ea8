"""Permission domain entity (catalog entry)."""

from dataclasses import dataclass

from venuehub.domain.exceptions import ValidationException
from venuehub.domain.value_objects import PermissionName


@dataclass
class PermissionEntity:
    """Catalog entry identified by its name.

    The name must be the canonical form of (module, action, scope), which
    keeps name uniqueness and triple uniqueness the same rule.
    """

    name: str
    module: str
    action: str
    scope: str
    display_name: str
    description: str = ""
    is_active: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise ValidationException if the name and triple disagree."""
        try:
            expected = PermissionName(self.module, self.action, self.scope)  # type: ignore[arg-type]
        except ValueError as e:
            raise ValidationException(str(e), field="module") from e
        if self.name != expected.value:
            raise ValidationException(
                f"Permission name must be {expected.value!r}", field="name"
            )
        if not self.display_name or not self.display_name.strip():
            raise ValidationException("Display name is required", field="display_name")

    @classmethod
    def from_name(
        cls, name: str, display_name: str, description: str = ""
    ) -> "PermissionEntity":
        parsed = PermissionName.parse(name)
        return cls(
            name=parsed.value,
            module=parsed.module.value,
            action=parsed.action.value,
            scope=parsed.scope.value,
            display_name=display_name,
            description=description,
        )
