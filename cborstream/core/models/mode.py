from enum import StrEnum


class SelfDescribeMode(StrEnum):
    """
    Controls whether the encoder places the self-describe marker in front
    of the frames it produces.

    The marker is a fixed byte sequence (for CBOR, tag 55799: d9 d9 f7)
    telling a generic reader "what follows is in this format". It carries no
    schema information and every compliant decoder skips it.
    """

    ALWAYS = "always"
    """
    Marker in front of every frame.
    """

    ONCE = "once"
    """
    Marker in front of the first frame produced by an encoder instance only.
    The encoder then behaves as NEVER for the rest of its life.
    """

    NEVER = "never"
    """
    No marker at all (default).
    """
