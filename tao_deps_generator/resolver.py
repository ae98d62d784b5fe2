"""
Alias resolution from measured C representations to Julia types
"""

from enum import Enum

from .constants import FLOAT_WIDTHS, INTEGER_WIDTHS, NATIVE_CALL_FLOATS, NATIVE_CALL_INTEGERS
from .errors import UnrepresentableWidthError, abi_assert
from .prober import MeasuredRepresentation


class AliasStyle(Enum):
    NATIVE_CALL = "native-call"
    FIXED_WIDTH = "fixed-width"


def fixed_width_name(rep: MeasuredRepresentation) -> str:
    """Julia sized type name derived purely from size and signedness"""
    if rep.floating:
        abi_assert(rep.size in FLOAT_WIDTHS, f"{rep.size} in {FLOAT_WIDTHS}", UnrepresentableWidthError)
        return f"Float{8*rep.size}"
    abi_assert(rep.size in INTEGER_WIDTHS, f"{rep.size} in {INTEGER_WIDTHS}", UnrepresentableWidthError)
    return f"{'' if rep.signed else 'U'}Int{8*rep.size}"


class AliasResolver:
    """Maps measured representations to Julia type names

    Resolution only looks at the (size, signedness) pair; the C name of the
    type is irrelevant since `long` and friends change width between
    platforms.
    """

    def __init__(self, primitive_sizes: dict[str, int]):
        # C primitive name -> measured size, e.g. {"int": 4, "long": 8, ...}
        self.primitive_sizes = dict(primitive_sizes)

    @classmethod
    def from_prober(cls, prober) -> "AliasResolver":
        integers = [c for c, _, _ in NATIVE_CALL_INTEGERS]
        floats = [c for c, _ in NATIVE_CALL_FLOATS]
        prober.prepare(types=integers, floats=floats)
        sizes = {c: prober.measure_type(c).size for c in integers}
        sizes.update({c: prober.measure_type(c, floating=True).size for c in floats})
        return cls(sizes)

    def resolve(self, rep: MeasuredRepresentation, style: AliasStyle = AliasStyle.FIXED_WIDTH) -> str:
        """Return the Julia type with exactly the size and signedness of `rep`"""
        if style == AliasStyle.NATIVE_CALL:
            if rep.floating:
                for ctype, name in NATIVE_CALL_FLOATS:
                    if self.primitive_sizes[ctype] == rep.size:
                        return name
            else:
                # First match wins: int, long, short, char
                for ctype, signed_name, unsigned_name in NATIVE_CALL_INTEGERS:
                    if self.primitive_sizes[ctype] == rep.size:
                        return signed_name if rep.signed else unsigned_name
        return fixed_width_name(rep)

    def representation_of(self, name: str) -> MeasuredRepresentation | None:
        """Inverse of `resolve`: the representation a Julia type name denotes"""
        for ctype, signed_name, unsigned_name in NATIVE_CALL_INTEGERS:
            if name in (signed_name, unsigned_name):
                return MeasuredRepresentation(self.primitive_sizes[ctype], name == signed_name)
        for ctype, float_name in NATIVE_CALL_FLOATS:
            if name == float_name:
                return MeasuredRepresentation(self.primitive_sizes[ctype], True, floating=True)
        if name.startswith("Float") and name[5:].isdigit():
            return MeasuredRepresentation(int(name[5:]) // 8, True, floating=True)
        signed = not name.startswith("U")
        bits = name[3:] if signed else name[4:]
        if name.startswith("Int" if signed else "UInt") and bits.isdigit():
            return MeasuredRepresentation(int(bits) // 8, signed)
        return None
