"""Base model configuration for all data structures."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base model with standard configuration.

    Models are frozen and accept arbitrary CBOR values (bytes, tags, simple
    values) as field contents.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
