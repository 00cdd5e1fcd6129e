"""Identity model for program elements tracked by the dead-reference registry.

A class is identified by its binary name, a method by (class, name, signature)
and a field by (class, name). The references here are plain value objects; they
carry already-computed strings and never look at a syntax tree.

Compact member notation (delimiter configurable, '#' by default):
    com.x.A               -> ClassRef
    com.x.B#flag          -> FieldRef
    com.x.B#run(I)V       -> MethodRef (signature starts at the first '(')
"""
from dataclasses import dataclass
from typing import Union

DEFAULT_DELIMITER = "#"


class ElementParseError(ValueError):
    """Raised when member notation cannot be split into an element reference."""


@dataclass(frozen=True)
class ClassRef:
    """A class identified by its fully-qualified binary name."""
    binary_name: str

    @property
    def kind(self) -> str:
        return "class"

    def notation(self, delimiter: str = DEFAULT_DELIMITER) -> str:
        return self.binary_name


@dataclass(frozen=True)
class MethodRef:
    """One method overload: owning class, method name and encoded signature."""
    class_name: str
    name: str
    signature: str  # e.g. erased descriptor "(Ljava/lang/String;)V"

    @property
    def kind(self) -> str:
        return "method"

    def notation(self, delimiter: str = DEFAULT_DELIMITER) -> str:
        return f"{self.class_name}{delimiter}{self.name}{self.signature}"


@dataclass(frozen=True)
class FieldRef:
    """A field. Fields have no overloads, so the name is the whole identity."""
    class_name: str
    name: str

    @property
    def kind(self) -> str:
        return "field"

    def notation(self, delimiter: str = DEFAULT_DELIMITER) -> str:
        return f"{self.class_name}{delimiter}{self.name}"


ElementRef = Union[ClassRef, MethodRef, FieldRef]


def parse_element(text: str, delimiter: str = DEFAULT_DELIMITER) -> ElementRef:
    """Parse member notation into a ClassRef, FieldRef or MethodRef.

    Args:
        text: Notation string such as 'com.x.B#run()V'
        delimiter: Separator between class and member

    Returns:
        The element reference described by text

    Raises:
        ElementParseError: If the class or member part is empty
    """
    text = text.strip()
    if not text:
        raise ElementParseError("Empty element reference")

    class_name, sep, member = text.partition(delimiter)
    if not class_name:
        raise ElementParseError(f"Missing class name in {text!r}")
    if not sep:
        return ClassRef(class_name)
    if not member:
        raise ElementParseError(f"Missing member name after {delimiter!r} in {text!r}")

    paren = member.find("(")
    if paren == -1:
        return FieldRef(class_name, member)
    if paren == 0:
        raise ElementParseError(f"Missing method name before signature in {text!r}")
    return MethodRef(class_name, member[:paren], member[paren:])


def parse_method(text: str, delimiter: str = DEFAULT_DELIMITER) -> MethodRef:
    """Parse notation that must describe a method."""
    ref = parse_element(text, delimiter)
    if not isinstance(ref, MethodRef):
        raise ElementParseError(
            f"Expected CLASS{delimiter}NAME(SIGNATURE), got {ref.kind} reference {text!r}"
        )
    return ref


def parse_field(text: str, delimiter: str = DEFAULT_DELIMITER) -> FieldRef:
    """Parse notation that must describe a field."""
    ref = parse_element(text, delimiter)
    if not isinstance(ref, FieldRef):
        raise ElementParseError(
            f"Expected CLASS{delimiter}FIELD, got {ref.kind} reference {text!r}"
        )
    return ref
