"""Configuration for USB HID authenticators."""

from pydantic import BaseModel


class HidConfig(BaseModel):
    """Configuration for the HID device plugin."""

    # None picks the first authenticator found
    path: str | None = None
