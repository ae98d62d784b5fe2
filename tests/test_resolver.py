"""
Unit tests for AliasResolver
"""

import pytest

from tao_deps_generator.errors import UnrepresentableWidthError
from tao_deps_generator.prober import MeasuredRepresentation
from tao_deps_generator.resolver import AliasResolver, AliasStyle, fixed_width_name


LP64 = {"int": 4, "long": 8, "short": 2, "char": 1, "float": 4, "double": 8}
LLP64 = {"int": 4, "long": 4, "short": 2, "char": 1, "float": 4, "double": 8}


class TestFixedWidth:
    """Test names derived from size and signedness only"""

    @pytest.mark.parametrize("size,signed,expected", [
        (1, True, "Int8"),
        (1, False, "UInt8"),
        (2, True, "Int16"),
        (4, False, "UInt32"),
        (8, True, "Int64"),
        (16, False, "UInt128"),
    ])
    def test_integer_names(self, size, signed, expected):
        assert fixed_width_name(MeasuredRepresentation(size, signed)) == expected

    def test_float_names(self):
        assert fixed_width_name(MeasuredRepresentation(4, True, floating=True)) == "Float32"
        assert fixed_width_name(MeasuredRepresentation(8, True, floating=True)) == "Float64"

    @pytest.mark.parametrize("size", [0, 3, 5, 12, 32])
    def test_unrepresentable_width_is_fatal(self, size):
        with pytest.raises(UnrepresentableWidthError) as excinfo:
            fixed_width_name(MeasuredRepresentation(size, True))
        assert excinfo.value.function == "fixed_width_name"
        assert excinfo.value.filename == "resolver.py"


class TestAliasResolver:
    """Test the AliasResolver class"""

    def setup_method(self):
        self.resolver = AliasResolver(LP64)

    def test_native_call_prefers_c_names(self):
        assert self.resolver.resolve(MeasuredRepresentation(4, True), AliasStyle.NATIVE_CALL) == "Cint"
        assert self.resolver.resolve(MeasuredRepresentation(4, False), AliasStyle.NATIVE_CALL) == "Cuint"
        assert self.resolver.resolve(MeasuredRepresentation(8, True), AliasStyle.NATIVE_CALL) == "Clong"
        assert self.resolver.resolve(MeasuredRepresentation(2, False), AliasStyle.NATIVE_CALL) == "Cushort"
        assert self.resolver.resolve(MeasuredRepresentation(1, True), AliasStyle.NATIVE_CALL) == "Cchar"
        assert self.resolver.resolve(MeasuredRepresentation(1, False), AliasStyle.NATIVE_CALL) == "Cuchar"

    def test_native_call_falls_back_to_fixed_width(self):
        assert self.resolver.resolve(MeasuredRepresentation(16, True), AliasStyle.NATIVE_CALL) == "Int128"

    def test_fixed_width_is_the_default(self):
        assert self.resolver.resolve(MeasuredRepresentation(8, True)) == "Int64"
        assert self.resolver.resolve(MeasuredRepresentation(4, False)) == "UInt32"

    def test_ties_resolve_to_int_first(self):
        resolver = AliasResolver(LLP64)
        assert resolver.resolve(MeasuredRepresentation(4, True), AliasStyle.NATIVE_CALL) == "Cint"
        assert resolver.resolve(MeasuredRepresentation(4, False), AliasStyle.NATIVE_CALL) == "Cuint"
        # Nothing is as wide as a 64-bit integer among the C primitives here
        assert resolver.resolve(MeasuredRepresentation(8, True), AliasStyle.NATIVE_CALL) == "Int64"

    def test_floats(self):
        single = MeasuredRepresentation(4, True, floating=True)
        double = MeasuredRepresentation(8, True, floating=True)
        assert self.resolver.resolve(single, AliasStyle.NATIVE_CALL) == "Cfloat"
        assert self.resolver.resolve(double, AliasStyle.NATIVE_CALL) == "Cdouble"
        assert self.resolver.resolve(double, AliasStyle.FIXED_WIDTH) == "Float64"

    def test_unrepresentable_width_in_native_call_style(self):
        with pytest.raises(UnrepresentableWidthError):
            self.resolver.resolve(MeasuredRepresentation(3, False), AliasStyle.NATIVE_CALL)

    @pytest.mark.parametrize("sizes", [LP64, LLP64])
    @pytest.mark.parametrize("style", list(AliasStyle))
    def test_resolution_preserves_representation(self, sizes, style):
        """Whatever the name chosen, it denotes the measured representation"""
        resolver = AliasResolver(sizes)
        for size in (1, 2, 4, 8):
            for signed in (True, False):
                rep = MeasuredRepresentation(size, signed)
                assert resolver.representation_of(resolver.resolve(rep, style)) == rep

    def test_representation_of_unknown_name(self):
        assert self.resolver.representation_of("Status") is None
        assert self.resolver.representation_of("Integer") is None
