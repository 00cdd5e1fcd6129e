"""Frozen registry of classes, methods and fields found dead by an analysis pass.

Lifecycle:
1. Analysis code accumulates facts on a mutable ``DeadReferenceMap.Builder``.
2. ``build()`` copies every collection into read-only containers and returns a
   ``DeadReferenceMap``.
3. Code generation queries the map before emitting each element and skips the
   element when the answer is True.

Identifiers are opaque, exact-match strings: binary class names, method names
with signatures in whatever encoding the caller uses, plain field names.

Concurrency: the builder is not synchronized. The frozen collections are safe
for concurrent reads. The constructor-removed set stays a plain mutable set
on the frozen map and needs external locking if written from several threads.
"""
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Set

from deadref.analyzer.elements import ClassRef, ElementRef, FieldRef, MethodRef
from deadref.utils.logger import debug_enabled, log_debug


class DeadReferenceMap:
    """Tracks classes, fields, and methods that are dead in analyzed source code."""

    class Builder:
        """Mutable accumulator for dead-reference facts.

        No validation is done: callers are trusted to pass identifiers of
        elements that actually exist. Every ``add_*`` returns the builder so
        calls can be chained.
        """

        def __init__(self):
            self._dead_classes: Set[str] = set()
            # class -> method name -> signatures
            self._dead_methods: Dict[str, Dict[str, Set[str]]] = {}
            # class -> field names (duplicates allowed, queried as a set)
            self._dead_fields: Dict[str, list] = {}

        def add_dead_class(self, class_id: str) -> "DeadReferenceMap.Builder":
            self._dead_classes.add(class_id)
            return self

        def add_dead_method(self, class_id: str, name: str,
                            signature: str) -> "DeadReferenceMap.Builder":
            names = self._dead_methods.setdefault(class_id, {})
            names.setdefault(name, set()).add(signature)
            return self

        def add_dead_field(self, class_id: str, field_name: str) -> "DeadReferenceMap.Builder":
            self._dead_fields.setdefault(class_id, []).append(field_name)
            return self

        def add_dead_element(self, ref: ElementRef) -> "DeadReferenceMap.Builder":
            """Record an element reference through the matching add_dead_* call.

            Raises:
                TypeError: If ref is not a ClassRef, MethodRef or FieldRef
            """
            if isinstance(ref, ClassRef):
                return self.add_dead_class(ref.binary_name)
            if isinstance(ref, MethodRef):
                return self.add_dead_method(ref.class_name, ref.name, ref.signature)
            if isinstance(ref, FieldRef):
                return self.add_dead_field(ref.class_name, ref.name)
            raise TypeError(f"Unsupported element reference: {type(ref).__name__}")

        def build(self) -> "DeadReferenceMap":
            """Freeze the current contents into a new DeadReferenceMap.

            Each call returns an independent snapshot; mutating the builder
            afterwards never shows through a map built earlier.
            """
            dead_methods = MappingProxyType({
                class_id: MappingProxyType({
                    name: frozenset(signatures)
                    for name, signatures in names.items()
                })
                for class_id, names in self._dead_methods.items()
            })
            dead_fields = MappingProxyType({
                class_id: frozenset(fields)
                for class_id, fields in self._dead_fields.items()
            })
            reference_map = DeadReferenceMap(
                frozenset(self._dead_classes), dead_methods, dead_fields
            )
            if debug_enabled():
                log_debug("DeadReferenceMap", f"Frozen {reference_map!r}")
            return reference_map

    @staticmethod
    def builder() -> "DeadReferenceMap.Builder":
        """Create a fresh, empty builder."""
        return DeadReferenceMap.Builder()

    def __init__(self, dead_classes: FrozenSet[str],
                 dead_methods: Mapping[str, Mapping[str, FrozenSet[str]]],
                 dead_fields: Mapping[str, FrozenSet[str]]):
        """Wrap already-frozen collections. Use Builder.build() instead."""
        self._dead_classes = dead_classes
        self._dead_methods = dead_methods
        self._dead_fields = dead_fields
        self._constructor_removed_classes: Set[str] = set()

    @property
    def dead_classes(self) -> FrozenSet[str]:
        return self._dead_classes

    @property
    def dead_methods(self) -> Mapping[str, Mapping[str, FrozenSet[str]]]:
        return self._dead_methods

    @property
    def dead_fields(self) -> Mapping[str, FrozenSet[str]]:
        return self._dead_fields

    def contains_class(self, class_id: str) -> bool:
        return class_id in self._dead_classes

    def contains_method(self, class_id: str, name: str, signature: str) -> bool:
        """Check whether a method overload is dead.

        A dead class makes all of its methods dead, whether or not they were
        recorded individually.
        """
        if class_id in self._dead_classes:
            return True
        signatures = self._dead_methods.get(class_id, {}).get(name)
        return signatures is not None and signature in signatures

    def contains_field(self, class_id: str, field_name: str) -> bool:
        """Check whether a field is dead (always True inside a dead class)."""
        if class_id in self._dead_classes:
            return True
        return field_name in self._dead_fields.get(class_id, ())

    def contains_element(self, ref: ElementRef) -> bool:
        """Query with an element reference instead of raw strings.

        Raises:
            TypeError: If ref is not a ClassRef, MethodRef or FieldRef
        """
        if isinstance(ref, ClassRef):
            return self.contains_class(ref.binary_name)
        if isinstance(ref, MethodRef):
            return self.contains_method(ref.class_name, ref.name, ref.signature)
        if isinstance(ref, FieldRef):
            return self.contains_field(ref.class_name, ref.name)
        raise TypeError(f"Unsupported element reference: {type(ref).__name__}")

    def is_empty(self) -> bool:
        """True when no class, method or field is dead.

        Constructor-removed classes are not considered.
        """
        return not (self._dead_classes or self._dead_methods or self._dead_fields)

    def add_constructor_removed_class(self, class_id: str):
        self._constructor_removed_classes.add(class_id)

    def class_has_constructor_removed(self, class_id: str) -> bool:
        return class_id in self._constructor_removed_classes

    def __str__(self) -> str:
        classes = sorted(self._dead_classes)
        fields = {
            class_id: sorted(self._dead_fields[class_id])
            for class_id in sorted(self._dead_fields)
        }
        methods = {
            class_id: {
                name: sorted(names[name])
                for name in sorted(names)
            }
            for class_id, names in sorted(self._dead_methods.items())
        }
        return "\n".join([
            f"Dead classes: {classes}",
            f"Dead fields: {fields}",
            f"Dead methods: {methods}",
        ])

    def __repr__(self) -> str:
        method_count = sum(
            len(signatures)
            for names in self._dead_methods.values()
            for signatures in names.values()
        )
        field_count = sum(len(fields) for fields in self._dead_fields.values())
        return (
            f"<DeadReferenceMap classes={len(self._dead_classes)} "
            f"methods={method_count} fields={field_count}>"
        )
