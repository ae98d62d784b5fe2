"""
Pre-flight checks of the platform assumptions the bindings rely on
"""

from .constants import ELTYPE_TYPE, OBJECT_TYPE, STATUS_TYPE
from .errors import abi_assert


class ConsistencyValidator:
    """Aborts generation if the TAO enumerations are not as wide as `int`

    The Julia side passes status codes, object types and element types as
    `Cint`, so any other width would corrupt every value crossing the
    boundary.
    """

    DEPENDENT_TYPES = (STATUS_TYPE, OBJECT_TYPE, ELTYPE_TYPE)

    def __init__(self, prober):
        self.prober = prober

    def validate(self):
        self.prober.prepare(types=("int",) + self.DEPENDENT_TYPES)
        int_size = self.prober.measure_type("int").size
        for ctype in self.DEPENDENT_TYPES:
            size = self.prober.measure_type(ctype).size
            abi_assert(int_size == size, f"sizeof(int) == sizeof({ctype})")
