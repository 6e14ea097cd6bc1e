"""
Skeleton Errors

Exceptions raised while loading a skeleton document or evaluating a pose.
Load errors reject the whole document; calculation errors reject a single
query and leave the loaded skeleton usable.
"""


class SkeletonError(RuntimeError):
    """Base class for every skeleton loading or evaluation failure."""

    def __init__(self, message: str, name: str = None):
        super().__init__(message)
        self.name = name


class LoadError(SkeletonError):
    """Raised when a document cannot be turned into a skeleton."""


class CalculationError(SkeletonError):
    """Raised when a single pose query cannot be answered."""


# ---------------------------------------------------------------------------
# Load-time errors
# ---------------------------------------------------------------------------

class BoneNotFound(LoadError, CalculationError):
    """A bone name does not match any declared (earlier) bone."""

    def __init__(self, name: str):
        super().__init__(f"Cannot find bone '{name}'", name)


class SlotNotFound(LoadError):
    """A skin or animation references an undeclared slot."""

    def __init__(self, name: str):
        super().__init__(f"Cannot find slot '{name}'", name)


class CyclicHierarchy(LoadError):
    """The bone parent links never resolve into a parent-first order."""

    def __init__(self, names):
        names = list(names)
        super().__init__(f"Cannot order bones, unresolved parents for: {', '.join(names)}")
        self.unresolved = names


class InvalidCurveDescriptor(LoadError):
    """A keyframe curve is neither linear, stepped nor a 4-value Bezier."""

    def __init__(self, curve):
        super().__init__(f"Invalid curve descriptor: {curve!r}")
        self.curve = curve


class InvalidColor(LoadError):
    """A color string is not an RRGGBB or RRGGBBAA hex value."""

    def __init__(self, value):
        super().__init__(f"Cannot convert color from hexadecimal: {value!r}")
        self.value = value


class InvalidDocument(LoadError):
    """A document record has the wrong shape (missing name, bad number, ...)."""


# ---------------------------------------------------------------------------
# Query-time errors
# ---------------------------------------------------------------------------

class SkinNotFound(CalculationError):
    """The requested skin is not part of the skeleton."""

    def __init__(self, name: str):
        super().__init__(f"Cannot find skin '{name}'", name)


class AnimationNotFound(CalculationError):
    """The requested animation is not part of the skeleton."""

    def __init__(self, name: str):
        super().__init__(f"Cannot find animation '{name}'", name)


class AttachmentNotFound(CalculationError):
    """A slot's active attachment exists in neither the active nor the default skin."""

    def __init__(self, slot: str, name: str):
        super().__init__(f"Cannot find attachment '{name}' for slot '{slot}'", name)
        self.slot = slot
