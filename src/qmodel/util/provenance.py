# -*- coding: utf-8 -*-
"""Provenance records for fitted results.

Environment details (OS, interpreter, library versions) are read through an
`EnvironmentInfoProvider`, which is created once at startup and passed in,
so tests and batch runs can substitute fixed values.
"""

import platform
import sys
from dataclasses import dataclass, field
from datetime import datetime
from importlib import metadata
from typing import Any, Optional, Protocol, runtime_checkable

from qmodel._version import __version__

from .defaults import SOFTWARE_NAME

TRACKED_PACKAGES = ("numpy", "mashumaro", "loguru", "simplejson", "click")


@dataclass(frozen=True)
class EnvironmentInfo:
    environment: str
    environment_details: str
    language: str
    max_size: int
    endian: str
    language_details: dict[str, str] = field(default_factory=dict)


@runtime_checkable
class EnvironmentInfoProvider(Protocol):
    def environment_info(self) -> EnvironmentInfo: ...


class PlatformInfoProvider:
    """Reads environment details from the running interpreter, once."""

    def __init__(self):
        self._info = None

    def environment_info(self) -> EnvironmentInfo:
        if self._info is None:
            packages = {}
            for name in TRACKED_PACKAGES:
                try:
                    packages[name] = metadata.version(name)
                except metadata.PackageNotFoundError:
                    packages[name] = "not installed"
            self._info = EnvironmentInfo(
                environment=platform.system(),
                environment_details=platform.platform(),
                language=f"Python {platform.python_version()}",
                max_size=sys.maxsize,
                endian=sys.byteorder,
                language_details=packages,
            )
        return self._info


_DEFAULT_PROVIDER = PlatformInfoProvider()


def get_provenance(
    provider: Optional[EnvironmentInfoProvider] = None,
    extra: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Build a provenance record for a fit.

    Parameters
    ----------
    provider : EnvironmentInfoProvider, optional
        Source of environment details, defaults to the running interpreter.
    extra : dict, optional
        Additional fields, merged last (they override the standard ones).

    Returns
    -------
    dict[str, Any]
        The provenance record.
    """
    if provider is None:
        provider = _DEFAULT_PROVIDER
    info = provider.environment_info()

    provenance = {
        "EstimationSoftwareName": SOFTWARE_NAME,
        "EstimationSoftwareVer": __version__,
        "EstimationDate": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "EstimationSoftwareEnv": info.environment,
        "MaxSize": info.max_size,
        "Endian": info.endian,
        "EstimationSoftwareEnvDetails": info.environment_details,
        "EstimationSoftwareLang": info.language,
        "EstimationSoftwareLangDetails": dict(info.language_details),
    }
    if extra:
        provenance.update(extra)
    return provenance
