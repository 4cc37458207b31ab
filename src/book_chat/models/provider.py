"""Provider models for book_chat.

These models describe providers and the per-call options sent to them.
"""

from pydantic import BaseModel, Field

__all__ = [
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TEMPERATURE",
    "ChatPreference",
    "ModelOption",
    "ProviderDescriptor",
    "ProviderOption",
    "RequestOptions",
]

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000


class ModelOption(BaseModel, frozen=True):
    """A model a provider offers, as shown in the model picker."""

    id: str
    label: str


class ProviderDescriptor(BaseModel, frozen=True):
    """Static identity of a provider.

    Attributes:
        name: Registry key (e.g. "openai")
        label: Human readable name
        auth_required: Whether a credential is mandatory
        models: Declared models, in picker order
    """

    name: str
    label: str
    auth_required: bool = True
    models: tuple[ModelOption, ...] = ()

    @property
    def first_model(self) -> str | None:
        """ID of the first declared model, if any."""
        return self.models[0].id if self.models else None


class ProviderOption(BaseModel, frozen=True):
    """Provider entry for a picker, with the login hint applied."""

    name: str
    label: str
    available: bool


class RequestOptions(BaseModel, frozen=True):
    """Per-call tuning. Missing fields are filled in by the adapter."""

    model: str | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, gt=0)

    def resolve(self, default_model: str) -> "RequestOptions":
        """Return a copy with every field populated."""
        return RequestOptions(
            model=self.model or default_model,
            temperature=DEFAULT_TEMPERATURE if self.temperature is None else self.temperature,
            max_tokens=self.max_tokens or DEFAULT_MAX_TOKENS,
        )


class ChatPreference(BaseModel, frozen=True):
    """The user's standing provider/model choice."""

    provider: str
    model: str
