"""
Ordered catalog of the element types of TAO shared arrays
"""

from dataclasses import dataclass
from enum import Enum

from .constants import ELEMENT_TYPES
from .errors import abi_assert
from .resolver import AliasStyle


class NumberClass(Enum):
    SIGNED_INT = "signed"
    UNSIGNED_INT = "unsigned"
    FLOAT = "float"


@dataclass(frozen=True)
class NativeTypeEntry:
    """An element type: its C type, TAO symbol, measured size and Julia alias"""
    symbolic_name: str
    c_type: str
    number_class: NumberClass
    size: int
    alias: str
    identifier: int
    description: str


def number_class_of(c_type: str) -> NumberClass:
    if c_type in ("float", "double"):
        return NumberClass.FLOAT
    return NumberClass.UNSIGNED_INT if c_type.startswith("u") else NumberClass.SIGNED_INT


class TypeRegistry:
    """Immutable, ordered sequence of `NativeTypeEntry`

    The order is the one of `ELEMENT_TYPES` and never changes: the i-th entry
    always denotes the same semantic type whatever its size on the platform.
    """

    def __init__(self, entries):
        self._entries = tuple(entries)

    @classmethod
    def build(cls, prober, resolver) -> "TypeRegistry":
        """Measure every element type and resolve its Julia alias"""
        integers = [c for c, _, _ in ELEMENT_TYPES if number_class_of(c) != NumberClass.FLOAT]
        floats = [c for c, _, _ in ELEMENT_TYPES if number_class_of(c) == NumberClass.FLOAT]
        prober.prepare(types=integers, floats=floats, constants=[t for _, t, _ in ELEMENT_TYPES])

        entries = []
        for c_type, tao_name, description in ELEMENT_TYPES:
            number_class = number_class_of(c_type)
            if number_class == NumberClass.FLOAT:
                rep = prober.measure_type(c_type, floating=True)
                alias = resolver.resolve(rep, AliasStyle.NATIVE_CALL)
            else:
                rep = prober.measure_type(c_type)
                abi_assert(rep.signed == (number_class == NumberClass.SIGNED_INT),
                           f"TAO_DEPS_IS_SIGNED({c_type}) == {int(number_class == NumberClass.SIGNED_INT)}")
                alias = resolver.resolve(rep, AliasStyle.FIXED_WIDTH)
            entries.append(NativeTypeEntry(
                symbolic_name=f"TAO_{tao_name}",
                c_type=c_type,
                number_class=number_class,
                size=rep.size,
                alias=alias,
                identifier=prober.measure_constant(tao_name),
                description=description,
            ))
        return cls(entries)

    @property
    def entries(self) -> tuple[NativeTypeEntry, ...]:
        return self._entries

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def get(self, identifier: int) -> NativeTypeEntry | None:
        """Entry with the given element type identifier, None if there is none"""
        for entry in self._entries:
            if entry.identifier == identifier:
                return entry
        return None
