"""
Constants and tables for the TAO Julia dependency generator
"""

# Default path of the core TAO dynamic library (the `TAO_DLL` build setting)
DEFAULT_LIBRARY_PATH = "/usr/local/lib/libtao.so"

# Headers included by the probe unit, in order
DEFAULT_HEADERS = ("stdint.h", "time.h", "tao.h", "tao-cameras.h")

# Name of the in-memory probe translation unit
PROBE_FILENAME = "tao_deps_probe.c"

# Prefix of every enumerator and typedef emitted in the probe unit
PROBE_PREFIX = "tao_deps_probe_"

# Helper macros prepended to the probe unit.  Each question about the
# platform becomes an integer constant expression folded by the compiler.
PROBE_PREAMBLE = """\
#define TAO_DEPS_IS_SIGNED(T) ((T)(~(T)0) < (T)0)
#define TAO_DEPS_OFFSET_OF(S, f) ((__SIZE_TYPE__)&(((S*)0)->f))
#define TAO_DEPS_TYPEOF_FIELD(S, f) __typeof__(((S*)0)->f)
enum tao_deps_test { TAO_DEPS_TEST1 = -1, TAO_DEPS_TEST2, TAO_DEPS_TEST3 };
"""

# Throwaway enumeration with a negative member (declared in the preamble)
TEST_ENUM = "enum tao_deps_test"

# Fallback search path when clang cannot be queried for its own
FALLBACK_SYSTEM_INCLUDE_DIRS = ["/usr/lib/clang/21/include", "/usr/local/include", "/usr/include"]

# Native-call primitives in the order ties are broken: (C type, signed, unsigned)
NATIVE_CALL_INTEGERS = (
    ("int", "Cint", "Cuint"),
    ("long", "Clong", "Culong"),
    ("short", "Cshort", "Cushort"),
    ("char", "Cchar", "Cuchar"),
)

NATIVE_CALL_FLOATS = (
    ("float", "Cfloat"),
    ("double", "Cdouble"),
)

# Byte sizes of the built-in Julia sized integer and floating-point types
INTEGER_WIDTHS = (1, 2, 4, 8, 16)
FLOAT_WIDTHS = (2, 4, 8)

# Element types of TAO shared arrays: (C type, TAO name, description)
ELEMENT_TYPES = (
    ("int8_t", "INT8", "Signed 8-bit integer"),
    ("uint8_t", "UINT8", "Unsigned 8-bit integer"),
    ("int16_t", "INT16", "Signed 16-bit integer"),
    ("uint16_t", "UINT16", "Unsigned 16-bit integer"),
    ("int32_t", "INT32", "Signed 32-bit integer"),
    ("uint32_t", "UINT32", "Unsigned 32-bit integer"),
    ("int64_t", "INT64", "Signed 64-bit integer"),
    ("uint64_t", "UINT64", "Unsigned 64-bit integer"),
    ("float", "FLOAT", "Single precision floating-point"),
    ("double", "DOUBLE", "Double precision floating-point"),
)

STATUS_CONSTANTS = ("ERROR", "OK", "TIMEOUT")

# Shared object type tags with their documentation
OBJECT_TYPE_CONSTANTS = (
    ("SHARED_MAGIC", "specifies a, hopefully unique, signature stored in\n"
                     "the 24 most significant bits of the TAO shared object type."),
    ("SHARED_OBJECT", "is the type of a basic TAO shared object."),
    ("SHARED_ARRAY", "is the type of a TAO shared multi-dimensional array."),
    ("SHARED_CAMERA", "is the type of a TAO shared camera data."),
    ("REMOTE_MIRROR", "is the type of a TAO remote deformable mirror."),
    ("SHARED_MIRROR_DATA", "is the type of a TAO shared deformable mirror data."),
    ("SHARED_ANY", "is the shared object type to use when any type is\nacceptable."),
)

CAPACITY_CONSTANTS = (
    ("SHARED_OWNER_SIZE", "is the the number of bytes (including the final\n"
                          "null) for the name of the owner."),
    ("MAX_NDIMS", "is the maximum number of dimensions of TAO arrays."),
)

CAMERA_STATES = (
    "CAMERA_STATE_INITIALIZING",
    "CAMERA_STATE_SLEEPING",
    "CAMERA_STATE_STARTING",
    "CAMERA_STATE_ACQUIRING",
    "CAMERA_STATE_STOPPING",
    "CAMERA_STATE_ABORTING",
    "CAMERA_STATE_FINISHED",
)

# Time specification structure and the members whose layout is exported
TIMESPEC_STRUCT = "struct timespec"
TIMESPEC_FIELDS = (("sec", "tv_sec"), ("nsec", "tv_nsec"))

# Native types the rest of the bindings assume to be as wide as `int`
STATUS_TYPE = "tao_status"
SHMID_TYPE = "tao_shmid"
OBJECT_TYPE = "tao_object_type"
ELTYPE_TYPE = "tao_eltype"

# Julia module the generated file is included in (used in docstrings)
JULIA_MODULE = "TaoBindings"

# Prefix of the TAO C symbols
TAO_PREFIX = "TAO_"
