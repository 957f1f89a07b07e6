"""Base entity class for named components."""

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    """Base class for all named components in the autotemp system.

    Provides a human-readable name used in log output and for looking
    up devices inside a State. Entities are immutable by default;
    components that carry runtime state keep it in private attributes
    so that their configuration stays frozen and serializable.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Human-readable name for this entity")

    def __repr__(self) -> str:
        """Return string representation showing all fields."""
        fields = []
        for field_name, field_value in self.model_dump().items():
            if isinstance(field_value, str):
                fields.append(f"{field_name}='{field_value}'")
            else:
                fields.append(f"{field_name}={field_value}")

        return f"{self.__class__.__name__}({', '.join(fields)})"
