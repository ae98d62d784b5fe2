"""
TAO Julia dependency generator - Generate `deps.jl` from the ABI of the TAO C library
"""

from .generator import DepsGenerator
from .config import GeneratorConfig, parse_config_file
from .prober import RepresentationProber, MeasuredRepresentation, FieldMeasurement
from .resolver import AliasResolver, AliasStyle
from .registry import TypeRegistry, NativeTypeEntry, NumberClass
from .emitter import DeclarationEmitter, EmittedArtifact
from .validator import ConsistencyValidator
from .errors import AbiAssertionError, UnrepresentableWidthError, ProbeError

__version__ = "0.1.0"

__all__ = [
    "DepsGenerator",
    "GeneratorConfig",
    "parse_config_file",
    "RepresentationProber",
    "MeasuredRepresentation",
    "FieldMeasurement",
    "AliasResolver",
    "AliasStyle",
    "TypeRegistry",
    "NativeTypeEntry",
    "NumberClass",
    "DeclarationEmitter",
    "EmittedArtifact",
    "ConsistencyValidator",
    "AbiAssertionError",
    "UnrepresentableWidthError",
    "ProbeError",
]
