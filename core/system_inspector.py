"""System inspection helpers for runtime and host diagnostics."""

from __future__ import annotations

import getpass
import logging
import os
import platform
import socket
import sys
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger("sysreport.inspector")

DEFAULT_PLACEHOLDER = "unknown"

T = TypeVar("T")


class Architecture(str, Enum):
    """Instruction-set architectures, named the way they are reported."""

    X86 = "X86"
    X64 = "X64"
    ARM = "Arm"
    ARMV6 = "Armv6"
    ARM64 = "Arm64"
    S390X = "S390x"
    PPC64LE = "Ppc64le"
    RISCV64 = "RiscV64"
    LOONGARCH64 = "LoongArch64"
    WASM = "Wasm"

    def __str__(self) -> str:
        return self.value


_MACHINE_ALIASES: dict[str, Architecture] = {
    "x86_64": Architecture.X64,
    "amd64": Architecture.X64,
    "x64": Architecture.X64,
    "i386": Architecture.X86,
    "i486": Architecture.X86,
    "i586": Architecture.X86,
    "i686": Architecture.X86,
    "x86": Architecture.X86,
    "aarch64": Architecture.ARM64,
    "arm64": Architecture.ARM64,
    "armv8l": Architecture.ARM,
    "arm": Architecture.ARM,
    "s390x": Architecture.S390X,
    "ppc64le": Architecture.PPC64LE,
    "riscv64": Architecture.RISCV64,
    "loongarch64": Architecture.LOONGARCH64,
    "wasm32": Architecture.WASM,
    "emscripten": Architecture.WASM,
    "wasi": Architecture.WASM,
}

_64BIT_ARCHITECTURES = frozenset(
    {
        Architecture.X64,
        Architecture.ARM64,
        Architecture.S390X,
        Architecture.PPC64LE,
        Architecture.RISCV64,
        Architecture.LOONGARCH64,
    }
)

_OS_TAGS = {"linux": "linux", "win32": "win", "cygwin": "win", "darwin": "osx"}


class SystemReport(BaseModel):
    """Snapshot of runtime and host facts, collected once per run."""

    model_config = ConfigDict(frozen=True)

    runtime_version: str
    runtime_identifier: str
    framework_description: str
    os_description: str
    os_architecture: Architecture | str
    process_architecture: Architecture | str
    machine_name: str
    user_name: str
    processor_count: int = Field(ge=1)
    is_64bit_os: bool
    is_64bit_process: bool


def normalize_architecture(machine: str) -> Architecture:
    """Map a raw machine string (``platform.machine()`` style) to an architecture."""
    key = machine.strip().lower()
    if key in _MACHINE_ALIASES:
        return _MACHINE_ALIASES[key]
    if key.startswith("armv6"):
        return Architecture.ARMV6
    if key.startswith("armv7"):
        return Architecture.ARM
    raise ValueError(f"Unrecognised machine architecture: {machine!r}")


def runtime_identifier(os_tag: str, architecture: Architecture) -> str:
    """Compose a platform tag such as ``linux-x64``."""
    return f"{os_tag}-{architecture.value.lower()}"


def _query(field: str, query: Callable[[], T], fallback: T) -> T:
    """Run a single introspection query, substituting ``fallback`` on failure."""
    try:
        value = query()
    except Exception as exc:
        logger.warning("Could not determine %s, using %r: %s", field, fallback, exc)
        return fallback
    if value is None or value == "":
        logger.warning("Empty value for %s, using %r", field, fallback)
        return fallback
    return value


def _is_64bit_process() -> bool:
    return sys.maxsize > 2**32


def _os_tag() -> str:
    for prefix, tag in _OS_TAGS.items():
        if sys.platform.startswith(prefix):
            return tag
    if sys.platform.startswith("freebsd"):
        return "freebsd"
    system = platform.system().lower()
    if not system:
        raise OSError("platform.system() returned nothing")
    return system


def _native_machine() -> str:
    # On Windows a 32-bit process sees the emulated architecture; the native one
    # is exposed separately under WOW64.
    if sys.platform == "win32":
        native = os.environ.get("PROCESSOR_ARCHITEW6432")
        if native:
            return native
    return platform.machine()


def _os_architecture() -> Architecture:
    return normalize_architecture(_native_machine())


def _process_architecture(os_arch: Architecture) -> Architecture:
    if _is_64bit_process():
        return os_arch
    if os_arch is Architecture.X64:
        return Architecture.X86
    if os_arch is Architecture.ARM64:
        return Architecture.ARM
    return os_arch


def _os_description() -> str:
    if sys.platform.startswith("linux"):
        try:
            release = platform.freedesktop_os_release()
        except OSError:
            release = {}
        pretty = release.get("PRETTY_NAME")
        if pretty:
            return pretty
    parts = [platform.system(), platform.release(), platform.version()]
    return " ".join(part for part in parts if part)


def _framework_description() -> str:
    return f"{platform.python_implementation()} {platform.python_version()}"


def _machine_name() -> str:
    name = platform.node() or socket.gethostname()
    return name.split(".", 1)[0]


def _processor_count() -> int:
    process_cpu_count = getattr(os, "process_cpu_count", None)
    if process_cpu_count is not None:
        count = process_cpu_count()
    elif hasattr(os, "sched_getaffinity"):
        count = len(os.sched_getaffinity(0))
    else:
        count = os.cpu_count()
    if not count or count < 1:
        raise OSError("processor count unavailable")
    return count


def collect(placeholder: str = DEFAULT_PLACEHOLDER) -> SystemReport:
    """Gather every report field, substituting ``placeholder`` for failed queries.

    Collection never raises for an individual query failure; each substitution
    is logged at WARNING on the ``sysreport.inspector`` logger.
    """
    is_64bit_process = _is_64bit_process()
    os_arch: Architecture | str = _query("os_architecture", _os_architecture, placeholder)
    if isinstance(os_arch, Architecture):
        process_arch: Architecture | str = _query(
            "process_architecture", lambda: _process_architecture(os_arch), placeholder
        )
        is_64bit_os = os_arch in _64BIT_ARCHITECTURES
    else:
        process_arch = placeholder
        is_64bit_os = is_64bit_process

    def _identifier() -> str:
        if not isinstance(process_arch, Architecture):
            raise ValueError("process architecture unknown")
        return runtime_identifier(_os_tag(), process_arch)

    return SystemReport(
        runtime_version=_query("runtime_version", platform.python_version, placeholder),
        runtime_identifier=_query("runtime_identifier", _identifier, placeholder),
        framework_description=_query("framework_description", _framework_description, placeholder),
        os_description=_query("os_description", _os_description, placeholder),
        os_architecture=os_arch,
        process_architecture=process_arch,
        machine_name=_query("machine_name", _machine_name, placeholder),
        user_name=_query("user_name", getpass.getuser, placeholder),
        processor_count=_query("processor_count", _processor_count, 1),
        is_64bit_os=is_64bit_os,
        is_64bit_process=is_64bit_process,
    )


def inspect_system(report: SystemReport | None = None) -> dict[str, str]:
    """Return the report as a flat mapping of field name to display string."""
    report = report or collect()
    data: dict[str, Any] = report.model_dump()
    return {key: str(value) for key, value in data.items()}
