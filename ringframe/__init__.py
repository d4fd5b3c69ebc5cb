"""ringframe - circular profile-picture frames with text along the ring."""

__version__ = "0.1.0"
