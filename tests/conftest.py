"""
Pytest configuration and fixtures
"""

import pytest
from pathlib import Path

from tao_deps_generator.config import GeneratorConfig


TAO_HEADER = """
#ifndef TAO_H_
#define TAO_H_

typedef __INT8_TYPE__ int8_t;
typedef __UINT8_TYPE__ uint8_t;
typedef __INT16_TYPE__ int16_t;
typedef __UINT16_TYPE__ uint16_t;
typedef __INT32_TYPE__ int32_t;
typedef __UINT32_TYPE__ uint32_t;
typedef __INT64_TYPE__ int64_t;
typedef __UINT64_TYPE__ uint64_t;

struct timespec {
    long tv_sec;
    long tv_nsec;
};

struct tao_padded {
    char tag;
    double value;
};

typedef enum @STATUS_ATTRIBUTE@ tao_status {
    TAO_ERROR = -1,
    TAO_OK = 0,
    TAO_TIMEOUT = 1
} tao_status;

typedef int tao_shmid;
#define TAO_BAD_SHMID ((tao_shmid)-1)

#define TAO_SHARED_MAGIC 0x31416000
typedef enum tao_object_type {
    @EXTRA_OBJECT_TYPE@
    TAO_SHARED_OBJECT = (TAO_SHARED_MAGIC | 0),
    TAO_SHARED_ARRAY = (TAO_SHARED_MAGIC | 1),
    TAO_SHARED_CAMERA = (TAO_SHARED_MAGIC | 2),
    TAO_REMOTE_MIRROR = (TAO_SHARED_MAGIC | 3),
    TAO_SHARED_MIRROR_DATA = (TAO_SHARED_MAGIC | 4),
    TAO_SHARED_ANY = 0xffffffff
} tao_object_type;

typedef enum tao_eltype {
    TAO_INT8 = @FIRST_ELTYPE@,
    TAO_UINT8 = 2,
    TAO_INT16 = 3,
    TAO_UINT16 = 4,
    TAO_INT32 = 5,
    TAO_UINT32 = 6,
    TAO_INT64 = 7,
    TAO_UINT64 = 8,
    TAO_FLOAT = 9,
    TAO_DOUBLE = 10
} tao_eltype;

#define TAO_SHARED_OWNER_SIZE 64
#define TAO_MAX_NDIMS 5

#endif
"""

TAO_CAMERAS_HEADER = """
#ifndef TAO_CAMERAS_H_
#define TAO_CAMERAS_H_

#include <tao.h>

typedef enum tao_camera_state {
    TAO_CAMERA_STATE_INITIALIZING = 0,
    TAO_CAMERA_STATE_SLEEPING = 1,
    TAO_CAMERA_STATE_STARTING = 2,
    TAO_CAMERA_STATE_ACQUIRING = 3,
    TAO_CAMERA_STATE_STOPPING = 4,
    TAO_CAMERA_STATE_ABORTING = 5,
    TAO_CAMERA_STATE_FINISHED = 6
} tao_camera_state;

#endif
"""


def write_tao_headers(directory: Path, status_attribute="", extra_object_type="", first_eltype=1) -> Path:
    """Write a self-contained fake TAO header set into `directory`"""
    directory.mkdir(parents=True, exist_ok=True)
    tao_header = (TAO_HEADER
                  .replace("@STATUS_ATTRIBUTE@", status_attribute)
                  .replace("@EXTRA_OBJECT_TYPE@", extra_object_type)
                  .replace("@FIRST_ELTYPE@", str(first_eltype)))
    (directory / "tao.h").write_text(tao_header)
    (directory / "tao-cameras.h").write_text(TAO_CAMERAS_HEADER)
    return directory


def make_config(include_dir: Path, **kwargs) -> GeneratorConfig:
    return GeneratorConfig(
        library_path=kwargs.pop("library_path", "/opt/tao/lib/libtao.so"),
        headers=["tao.h", "tao-cameras.h"],
        include_dirs=[str(include_dir)],
        system_includes=False,
        **kwargs,
    )


@pytest.fixture
def tao_include_dir(tmp_path):
    """Directory holding the fake TAO headers"""
    return write_tao_headers(tmp_path / "include")


@pytest.fixture
def config(tao_include_dir):
    """Generator configuration pointing at the fake TAO headers"""
    return make_config(tao_include_dir)


@pytest.fixture
def packed_status_config(tmp_path):
    """Configuration where `tao_status` is narrower than `int`"""
    include_dir = write_tao_headers(tmp_path / "packed", status_attribute="__attribute__((packed))")
    return make_config(include_dir)


@pytest.fixture
def wide_object_config(tmp_path):
    """Configuration where `tao_object_type` is wider than `int`"""
    include_dir = write_tao_headers(tmp_path / "wide_object", extra_object_type="TAO_SHARED_WIDE = 0x100000000,")
    return make_config(include_dir)
