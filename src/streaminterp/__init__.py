"""streaminterp: streaming linear and Newton interpolation at a fixed x step.

The engine lives in ``engine`` (state machine) and ``actor`` (mailbox
thread); ``cli`` is the command-line front end. ``__version__`` comes from
the installed distribution, falling back to the constant below when the
package runs from a source checkout.
"""

from __future__ import annotations

from importlib import metadata as _metadata

__all__ = ["__version__"]

_FALLBACK_VERSION = "0.3.0"  # MUST match pyproject.toml [project].version

try:  # pragma: no cover - success path covered indirectly via CLI test
	__version__ = _metadata.version("streaminterp")  # type: ignore[assignment]
except _metadata.PackageNotFoundError:  # pragma: no cover - fallback exercised if metadata missing
	__version__ = _FALLBACK_VERSION
