"""
Rendering of the Julia declarations of `deps.jl`
"""

from dataclasses import dataclass, field

from .constants import (
    CAMERA_STATES,
    CAPACITY_CONSTANTS,
    ELEMENT_TYPES,
    ELTYPE_TYPE,
    JULIA_MODULE,
    NATIVE_CALL_FLOATS,
    NATIVE_CALL_INTEGERS,
    OBJECT_TYPE,
    OBJECT_TYPE_CONSTANTS,
    SHMID_TYPE,
    STATUS_CONSTANTS,
    STATUS_TYPE,
    TEST_ENUM,
    TIMESPEC_FIELDS,
    TIMESPEC_STRUCT,
)
from .resolver import AliasStyle

HEADER = """\
#
# deps.jl --
#
# Definitions for the Julia interface to TAO C-library.
#
# *IMPORTANT* This file has been automatically generated, do not edit it
#             directly but rather modify the generator in `tao_deps_generator`.
#
#------------------------------------------------------------------------------
#
# This file is part of TAO software (https://git-cral.univ-lyon1.fr/tao)
# licensed under the MIT license.
#"""


def julia_string(text: str) -> str:
    """Quote `text` as a Julia string literal"""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    return f'"{escaped}"'


def hex_literal(value: int, size: int) -> str:
    """Zero-padded hexadecimal literal showing all the bits of a `size`-byte value"""
    return f"0x{value & ((1 << 8*size) - 1):0{2*size}x}"


@dataclass
class Comment:
    text: str

    def render(self) -> str:
        return "\n".join(f"# {line}" if line else "#" for line in self.text.split("\n"))


@dataclass
class Blank:
    def render(self) -> str:
        return ""


@dataclass
class Raw:
    """Verbatim text, used for the provenance header"""
    text: str

    def render(self) -> str:
        return self.text


@dataclass
class DocString:
    text: str

    def render(self) -> str:
        return f'"""\n{self.text}\n"""'


@dataclass
class Constant:
    name: str
    value: str
    width: int = 0
    comment: str | None = None

    def render(self) -> str:
        code = f"const {self.name:<{self.width}} = {self.value}"
        if self.comment:
            code += f" # {self.comment}"
        return code


@dataclass
class StructDeclaration:
    name: str
    fields: list[tuple[str, str]]

    def render(self) -> str:
        members = "".join(f"    {name}::{type_name}\n" for name, type_name in self.fields)
        return f"struct {self.name}\n{members}end"


@dataclass
class WrappedDeclaration:
    """A list of items after `prefix`, wrapped every `per_line` items"""
    prefix: str
    items: list[str]
    suffix: str
    per_line: int = 5

    def render(self) -> str:
        parts = []
        for i, item in enumerate(self.items):
            if i > 0:
                parts.append(",\n" + " " * len(self.prefix) if i % self.per_line == 0 else ", ")
            parts.append(item)
        return self.prefix + "".join(parts) + self.suffix


@dataclass
class DispatchClause:
    function: str
    argument_type: str
    result: str

    def render(self) -> str:
        return f"{self.function}(::Type{{{self.argument_type}}}) = {self.result}"


@dataclass
class DispatchFallback:
    """Method catching every type without a clause of its own"""
    function: str
    message: str

    def render(self) -> str:
        return (f"@noinline {self.function}(::Type{{T}}) where T =\n"
                f"    error({julia_string(self.message)}, T)")


@dataclass
class EmittedArtifact:
    """Ordered records making up the generated file"""
    records: list = field(default_factory=list)

    def add(self, *records):
        self.records.extend(records)

    def render(self) -> str:
        return "\n".join(record.render() for record in self.records) + "\n"

    def write(self, sink):
        sink.write(self.render())


class DeclarationEmitter:
    """Builds the `deps.jl` artifact from the registry and the measurements"""

    def __init__(self, config, prober, resolver, registry):
        self.config = config
        self.prober = prober
        self.resolver = resolver
        self.registry = registry

    @staticmethod
    def measurements() -> dict:
        """Everything `emit` and its collaborators measure, for one batched probe"""
        integers = [c for c, _, _ in NATIVE_CALL_INTEGERS]
        integers += [c for c, _, _ in ELEMENT_TYPES if c not in ("float", "double")]
        integers += [STATUS_TYPE, SHMID_TYPE, OBJECT_TYPE, ELTYPE_TYPE, TEST_ENUM]
        constants = list(STATUS_CONSTANTS) + ["BAD_SHMID"]
        constants += [name for name, _ in OBJECT_TYPE_CONSTANTS + CAPACITY_CONSTANTS]
        constants += [name for _, name, _ in ELEMENT_TYPES] + list(CAMERA_STATES)
        return dict(
            types=integers,
            floats=[c for c, _ in NATIVE_CALL_FLOATS],
            sizes=[TIMESPEC_STRUCT],
            fields=[(TIMESPEC_STRUCT, member) for _, member in TIMESPEC_FIELDS],
            constants=constants,
        )

    def _alias(self, ctype: str, style: AliasStyle) -> str:
        return self.resolver.resolve(self.prober.measure_type(ctype), style)

    def emit(self) -> EmittedArtifact:
        artifact = EmittedArtifact()
        self._emit_header(artifact)
        self._emit_status(artifact)
        self._emit_shmid(artifact)
        self._emit_enum(artifact)
        self._emit_object_types(artifact)
        self._emit_capacities(artifact)
        self._emit_element_types(artifact)
        self._emit_dispatch(artifact)
        self._emit_eltype_table(artifact)
        self._emit_timespec(artifact)
        self._emit_camera_states(artifact)
        return artifact

    def _emit_header(self, artifact):
        artifact.add(
            Raw(HEADER),
            Blank(),
            Comment("Path to the core TAO dynamic library:"),
            Constant("taolib", julia_string(self.config.library_path)),
        )

    def _emit_status(self, artifact):
        artifact.add(
            Blank(),
            Comment("Possible return values for an operation:"),
            StructDeclaration("Status", [("val", self._alias(STATUS_TYPE, AliasStyle.NATIVE_CALL))]),
        )
        for name in STATUS_CONSTANTS:
            artifact.add(Constant(name, f"Status({self.prober.measure_constant(name):2d})", width=7))

    def _emit_shmid(self, artifact):
        artifact.add(
            Blank(),
            Comment("Type used to store a shared memory identifier:"),
            Constant("ShmId", self._alias(SHMID_TYPE, AliasStyle.FIXED_WIDTH)),
            Blank(),
            DocString(f"`{JULIA_MODULE}.BAD_SHMID` is used to denote an invalid shared memory identifier."),
            Constant("BAD_SHMID", f"ShmId({self.prober.measure_constant('BAD_SHMID')})"),
        )

    def _emit_enum(self, artifact):
        # An enumeration with a negative member, so that its signedness is
        # the one the compiler picks rather than the one C would suggest.
        artifact.add(
            Blank(),
            Comment("Julia type corresponding to a C enumeration:"),
            Constant("Cenum", self._alias(TEST_ENUM, AliasStyle.NATIVE_CALL)),
        )

    def _emit_object_types(self, artifact):
        size = self.prober.measure_type(OBJECT_TYPE).size
        for name, doc in OBJECT_TYPE_CONSTANTS:
            artifact.add(
                Blank(),
                DocString(f"`{JULIA_MODULE}.{name}` {doc}"),
                Constant(name, hex_literal(self.prober.measure_constant(name), size)),
            )

    def _emit_capacities(self, artifact):
        for name, doc in CAPACITY_CONSTANTS:
            artifact.add(
                Blank(),
                DocString(f"`{JULIA_MODULE}.{name}` {doc}"),
                Constant(name, str(self.prober.measure_constant(name))),
            )

    def _emit_element_types(self, artifact):
        by_identifier = []
        for identifier in range(1, len(self.registry) + 1):
            entry = self.registry.get(identifier)
            by_identifier.append(entry.alias if entry is not None else "Nothing")
        artifact.add(
            Blank(),
            Comment("Union of all element types of TAO shared arrays."),
            WrappedDeclaration("const SharedArrayElementTypes = Union{",
                               [entry.alias for entry in self.registry], "}"),
            Blank(),
            Comment("List of all element types of TAO shared arrays (can be indexed\n"
                    "by TAO element type identifier)."),
            WrappedDeclaration("const SHARED_ARRAY_ELTYPES = (", by_identifier, ")"),
        )

    def _emit_dispatch(self, artifact):
        # Element type codes are passed as `int`, whatever the signedness of
        # the enumeration.
        eltype = self._alias("int", AliasStyle.NATIVE_CALL)
        artifact.add(
            Blank(),
            DocString(f"    {JULIA_MODULE}.shared_array_eltype(T) -> id\n"
                      "\n"
                      "yields the element type code of TAO shared array corresponding to Julia\n"
                      "type `T`.  An error is raised if `T` is not supported."),
        )
        for entry in self.registry:
            artifact.add(DispatchClause("shared_array_eltype", entry.alias, f"{eltype}({entry.identifier})"))
        artifact.add(DispatchFallback("shared_array_eltype", "unsupported element type "))

    def _emit_eltype_table(self, artifact):
        artifact.add(Blank(), Comment("Identifiers of the type of the elements in an array."))
        for entry in self.registry:
            name = entry.symbolic_name.replace("TAO_", "ELTYPE_", 1)
            artifact.add(Constant(name, f"{entry.identifier:2d}", width=13, comment=entry.description))

    def _emit_timespec(self, artifact):
        measurements = [(suffix, self.prober.measure_field(TIMESPEC_STRUCT, member))
                        for suffix, member in TIMESPEC_FIELDS]
        artifact.add(Blank(), Comment("Julia types of the members of the C `timespec` structure."))
        for suffix, measured in measurements:
            alias = self.resolver.resolve(measured.representation, AliasStyle.FIXED_WIDTH)
            artifact.add(Constant(f"_typeof_timespec_{suffix}", alias))
        artifact.add(Blank(), Comment("Layout (in bytes) of the C `timespec` structure."))
        for suffix, measured in measurements:
            artifact.add(Constant(f"_offsetof_timespec_{suffix}", str(measured.offset)))
        artifact.add(Constant("_sizeof_timespec", str(self.prober.measure_size(TIMESPEC_STRUCT))))

    def _emit_camera_states(self, artifact):
        cint = self._alias("int", AliasStyle.NATIVE_CALL)
        artifact.add(Blank(), Comment("The different possible camera states."))
        for name in CAMERA_STATES:
            artifact.add(Constant(name, f"{cint}({self.prober.measure_constant(name)})", width=25))
