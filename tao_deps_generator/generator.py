"""
Main orchestration of the `deps.jl` generation
"""

from .config import GeneratorConfig
from .emitter import DeclarationEmitter
from .prober import RepresentationProber
from .registry import TypeRegistry
from .resolver import AliasResolver
from .validator import ConsistencyValidator


class DepsGenerator:
    """Generates the Julia definitions for the TAO C library of this platform"""

    def __init__(self, config: GeneratorConfig | None = None, prober: RepresentationProber | None = None):
        self.config = config if config is not None else GeneratorConfig()
        self.prober = prober if prober is not None else RepresentationProber(self.config)

    def generate(self, sink=None) -> str:
        """Generate `deps.jl` and write it to `sink` (if any) in a single write

        Nothing is written unless every check and measurement succeeded.
        """
        ConsistencyValidator(self.prober).validate()

        self.prober.prepare(**DeclarationEmitter.measurements())
        resolver = AliasResolver.from_prober(self.prober)
        registry = TypeRegistry.build(self.prober, resolver)
        artifact = DeclarationEmitter(self.config, self.prober, resolver, registry).emit()

        if sink is not None:
            artifact.write(sink)
        return artifact.render()
