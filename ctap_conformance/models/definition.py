"""Models describing reference payloads and what to mutate in them."""

from collections.abc import Sequence
from typing import Any, Self

from pydantic import Field, model_validator

from ctap_conformance.commands import Command
from ctap_conformance.models.base import Model

type ParameterKey = int | str


class ReferencePayload(Model):
    """A well-formed command parameter map with required-key metadata."""

    name: str = Field(..., description="Name used as prefix of case labels")
    parameters: dict[ParameterKey, Any] = Field(
        default_factory=dict, description="Parameter key to correctly typed value"
    )
    required: frozenset[ParameterKey] = Field(
        default_factory=frozenset, description="Keys the command cannot do without"
    )

    @model_validator(mode="after")
    def _required_keys_present(self) -> Self:
        if missing := self.required - self.parameters.keys():
            raise ValueError(
                f"Required keys {sorted(missing, key=repr)} have no reference value"
            )
        return self


class InnerMapTarget(Model):
    """A map nested under a parameter whose entries get wrong types."""

    key: ParameterKey = Field(..., description="Parameter holding the map")
    inner_map: dict[ParameterKey, Any] = Field(
        ..., description="Reference map with correctly typed entries"
    )
    wrap_in_array: bool = Field(
        default=False, description="Send the map as the only element of an array"
    )


class InnerArrayTarget(Model):
    """An array parameter whose elements get wrong types."""

    key: ParameterKey = Field(..., description="Parameter holding the array")
    elements: Sequence[Any] = Field(
        ..., description="Reference array with correctly typed elements"
    )


class CommandDefinition(Model):
    """Everything needed to generate negative cases for one command."""

    command: Command = Field(..., description="Command the payload belongs to")
    payload: ReferencePayload = Field(..., description="Reference payload")
    inner_maps: Sequence[InnerMapTarget] = Field(default_factory=list)
    inner_arrays: Sequence[InnerArrayTarget] = Field(default_factory=list)
    descriptor_lists: Sequence[ParameterKey] = Field(
        default_factory=list,
        description="Parameters holding credential descriptor arrays",
    )
    requires_auth: bool = Field(
        default=False, description="Whether the payload needs PIN/UV auth members"
    )
