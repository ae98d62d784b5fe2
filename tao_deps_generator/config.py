"""
Configuration of the TAO Julia dependency generator
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from .constants import DEFAULT_HEADERS, DEFAULT_LIBRARY_PATH


@dataclass
class GeneratorConfig:
    """Where the TAO library lives and how to compile the probe unit"""
    library_path: str = DEFAULT_LIBRARY_PATH
    headers: list[str] = field(default_factory=lambda: list(DEFAULT_HEADERS))
    include_dirs: list[str] = field(default_factory=list)
    defines: list[tuple[str, str | None]] = field(default_factory=list)
    clang_path: str | None = None
    system_includes: bool = True

    def clang_args(self, system_include_dirs=()) -> list[str]:
        """Arguments given to libclang when parsing the probe unit"""
        args = ["-x", "c", "-std=gnu11"]
        for name, value in self.defines:
            args.append(f"-D{name}" if value is None else f"-D{name}={value}")
        for include_dir in self.include_dirs:
            args.append(f"-I{include_dir}")
        for include_dir in system_include_dirs:
            args.append(f"-I{include_dir}")
        return args


def parse_config_file(config_path):
    """Parse XML configuration file and return GeneratorConfig object"""
    try:
        tree = ET.parse(config_path)
        root = tree.getroot()

        if root.tag != "deps":
            raise ValueError(f"Expected root element 'deps', got '{root.tag}'")

        config = GeneratorConfig()

        library = root.get("library")
        if library is not None:
            if not library.strip():
                raise ValueError("Attribute 'library' of 'deps' element is empty")
            config.library_path = library.strip()

        system_includes = root.get("system_includes", "true").strip().lower()
        if system_includes not in ("true", "false"):
            raise ValueError(f"Invalid system_includes value '{system_includes}'. Must be 'true' or 'false'.")
        config.system_includes = system_includes == "true"

        for include_dir in root.findall("include_directory"):
            path = include_dir.get("path")
            if not path:
                raise ValueError("Include directory element missing 'path' attribute")
            config.include_dirs.append(path.strip())

        # Explicit headers replace the default list
        headers = []
        for header in root.findall("header"):
            file_name = header.get("file")
            if not file_name:
                raise ValueError("Header element missing 'file' attribute")
            headers.append(file_name.strip())
        if headers:
            config.headers = headers

        for define in root.findall("define"):
            name = define.get("name")
            if not name:
                raise ValueError("Define element missing 'name' attribute")
            value = define.get("value")  # Optional, can be None
            if value is not None:
                value = value.strip()
            config.defines.append((name.strip(), value))

        clang = root.find("clang")
        if clang is not None:
            path = clang.get("path")
            if not path:
                raise ValueError("Clang element missing 'path' attribute")
            config.clang_path = path.strip()

        return config

    except ET.ParseError as e:
        raise ValueError(f"XML parsing error: {e}")
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
