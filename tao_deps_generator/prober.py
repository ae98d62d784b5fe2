"""
Measurement of native type representations on the build platform

Every question about the platform is compiled by libclang as an integer
constant expression in a small probe translation unit which includes the
TAO headers.  The answers are the values clang folds for the enumerators of
that unit, so they reflect the actual target ABI rather than any assumption.
"""

import subprocess
import sys
from dataclasses import dataclass

import clang.cindex
from clang.cindex import CursorKind

from .config import GeneratorConfig
from .constants import (
    FALLBACK_SYSTEM_INCLUDE_DIRS,
    PROBE_FILENAME,
    PROBE_PREAMBLE,
    PROBE_PREFIX,
    TAO_PREFIX,
    TEST_ENUM,
)
from .errors import ProbeError, abi_assert


@dataclass(frozen=True)
class MeasuredRepresentation:
    """Size in bytes and signedness of a native scalar"""
    size: int
    signed: bool
    floating: bool = False


@dataclass(frozen=True)
class FieldMeasurement:
    """Byte offset and representation of a structure member"""
    struct: str
    field: str
    offset: int
    representation: MeasuredRepresentation


def system_include_dirs() -> list[str]:
    """Ask clang for its default header search path"""
    try:
        result = subprocess.run(
            ['clang', '-E', '-v', '-'],
            input=b'',
            capture_output=True,
            text=False,
            timeout=2
        )
    except (OSError, subprocess.SubprocessError):
        return list(FALLBACK_SYSTEM_INCLUDE_DIRS)

    dirs = []
    stderr = result.stderr.decode('utf-8', errors='ignore')
    in_includes = False
    for line in stderr.split('\n'):
        if '#include <...> search starts here:' in line:
            in_includes = True
            continue
        if in_includes:
            if line.startswith('End of search list'):
                break
            # Extract path from line like " /usr/include"
            path = line.strip()
            if path and path.startswith('/'):
                dirs.append(path)
    return dirs or list(FALLBACK_SYSTEM_INCLUDE_DIRS)


def size_expression(ctype: str) -> str:
    return f"sizeof({ctype})"


def signed_expression(ctype: str) -> str:
    return f"TAO_DEPS_IS_SIGNED({ctype})"


def offset_expression(struct: str, field: str) -> str:
    return f"TAO_DEPS_OFFSET_OF({struct}, {field})"


def field_type(struct: str, field: str) -> str:
    return f"TAO_DEPS_TYPEOF_FIELD({struct}, {field})"


class RepresentationProber:
    """Measures sizes, signedness, offsets and constants with libclang

    Answers are cached for the lifetime of the prober.  `prepare` batches
    many requests into a single compilation; the `measure_*` methods compile
    whatever they still miss.
    """

    def __init__(self, config: GeneratorConfig | None = None, index=None):
        self.config = config if config is not None else GeneratorConfig()
        self._index = index
        self._values = {}   # expression -> folded integer value
        self._layouts = {}  # (struct, field) -> offset in bits from clang's record layout
        self._include_dirs = None
        self.compilations = 0

    @property
    def index(self):
        if self._index is None:
            if self.config.clang_path and not clang.cindex.Config.loaded:
                clang.cindex.Config.set_library_path(self.config.clang_path)
            try:
                self._index = clang.cindex.Index.create()
            except clang.cindex.LibclangError as e:
                print(f"Error loading libclang: {e}", file=sys.stderr)
            abi_assert(self._index is not None, "libclang can be loaded", ProbeError)
        return self._index

    def _clang_args(self) -> list[str]:
        if self._include_dirs is None:
            self._include_dirs = system_include_dirs() if self.config.system_includes else []
        return self.config.clang_args(self._include_dirs)

    def _type_expressions(self, ctype: str, floating: bool) -> list[str]:
        if floating:
            return [size_expression(ctype)]
        return [size_expression(ctype), signed_expression(ctype)]

    def _field_expressions(self, struct: str, field: str, floating: bool) -> list[str]:
        return [offset_expression(struct, field)] + self._type_expressions(field_type(struct, field), floating)

    def prepare(self, types=(), floats=(), sizes=(), fields=(), float_fields=(), constants=()):
        """Measure everything requested with at most one compilation

        `types` are integer (or enumeration) C types, `floats` floating-point
        C types, `sizes` any C types of which only the size is needed,
        `fields` and `float_fields` (struct, member) pairs of integer and
        floating-point members, and `constants` TAO symbol names without
        their `TAO_` prefix.
        """
        expressions = [size_expression(ctype) for ctype in sizes]
        for ctype in types:
            expressions.extend(self._type_expressions(ctype, False))
        for ctype in floats:
            expressions.extend(self._type_expressions(ctype, True))
        for struct, field in fields:
            expressions.extend(self._field_expressions(struct, field, False))
        for struct, field in float_fields:
            expressions.extend(self._field_expressions(struct, field, True))
        for name in constants:
            expressions.append(TAO_PREFIX + name)
        missing = [e for e in dict.fromkeys(expressions) if e not in self._values]
        layouts = [f for f in dict.fromkeys(list(fields) + list(float_fields)) if f not in self._layouts]
        if missing or layouts:
            self._compile(missing, layouts)

    def _value(self, expression: str) -> int:
        if expression not in self._values:
            self._compile([expression], [])
        return self._values[expression]

    def _compile(self, expressions: list[str], layouts: list[tuple[str, str]]):
        lines = [f"#include <{header}>" for header in self.config.headers]
        lines.append(PROBE_PREAMBLE)
        for i, expression in enumerate(expressions):
            lines.append(f"enum {{ {PROBE_PREFIX}{i} = ({expression}) }};")
        structs = list(dict.fromkeys(struct for struct, _ in layouts))
        for i, struct in enumerate(structs):
            lines.append(f"typedef {struct} {PROBE_PREFIX}layout_{i};")
        source = "\n".join(lines) + "\n"

        tu = self.index.parse(PROBE_FILENAME, args=self._clang_args(),
                              unsaved_files=[(PROBE_FILENAME, source)])
        self.compilations += 1

        errors = [diag for diag in tu.diagnostics if diag.severity >= clang.cindex.Diagnostic.Error]
        for diag in errors:
            print(f"Error in {PROBE_FILENAME}: {diag.spelling}", file=sys.stderr)
        abi_assert(not errors, f"{PROBE_FILENAME} compiles without errors", ProbeError)

        values = {}
        records = {}
        for cursor in tu.cursor.get_children():
            if cursor.kind == CursorKind.ENUM_DECL:
                for child in cursor.get_children():
                    name = child.spelling
                    if child.kind == CursorKind.ENUM_CONSTANT_DECL and name.startswith(PROBE_PREFIX):
                        values[int(name[len(PROBE_PREFIX):])] = child.enum_value
            elif cursor.kind == CursorKind.TYPEDEF_DECL and cursor.spelling.startswith(PROBE_PREFIX + "layout_"):
                i = int(cursor.spelling[len(PROBE_PREFIX + "layout_"):])
                records[structs[i]] = cursor.underlying_typedef_type.get_canonical()

        for i, expression in enumerate(expressions):
            abi_assert(i in values, f"{expression} is an integer constant expression", ProbeError)
            self._values[expression] = values[i]
        for struct, field in layouts:
            bits = records[struct].get_offset(field)
            abi_assert(bits >= 0, f"offsetof({struct}, {field}) >= 0", ProbeError)
            self._layouts[(struct, field)] = bits

    def measure_type(self, ctype: str, floating: bool = False) -> MeasuredRepresentation:
        """Size and signedness of a C type, by setting all of its bits"""
        if floating:
            self.prepare(floats=[ctype])
            return MeasuredRepresentation(self._value(size_expression(ctype)), True, floating=True)
        self.prepare(types=[ctype])
        return MeasuredRepresentation(self._value(size_expression(ctype)),
                                      bool(self._value(signed_expression(ctype))))

    def measure_size(self, ctype: str) -> int:
        """Size in bytes of any C type, structures included"""
        return self._value(size_expression(ctype))

    def measure_field(self, struct: str, field: str, floating: bool = False) -> FieldMeasurement:
        """Offset and representation of a member of a structure

        Floating-point members must be flagged with `floating`, the
        set-all-bits test only applies to integers.
        """
        if floating:
            self.prepare(float_fields=[(struct, field)])
        else:
            self.prepare(fields=[(struct, field)])
        offset = self._value(offset_expression(struct, field))
        layout = self.layout_offset(struct, field)
        abi_assert(offset == layout, f"{offset_expression(struct, field)} == {layout}")
        return FieldMeasurement(struct, field, offset, self.measure_type(field_type(struct, field), floating))

    def layout_offset(self, struct: str, field: str) -> int:
        """Byte offset of a member according to clang's record layout"""
        key = (struct, field)
        if key not in self._layouts:
            self._compile([], [key])
        return self._layouts[key] // 8

    def measure_enum_signedness(self) -> bool:
        """Whether the compiler makes an enumeration with a negative member signed"""
        return self.measure_type(TEST_ENUM).signed

    def measure_constant(self, name: str) -> int:
        """Value of a compiled-in TAO constant given without its prefix"""
        return self._value(TAO_PREFIX + name)
