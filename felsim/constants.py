"""Physical constants and version information shared across the package."""

VACIMP = 376.73
"""Vacuum impedance in ohms."""

EEV = 510999.06
"""Electron rest energy in eV."""

CE = 4.8032045e-11
"""Electron charge divided by the speed of light, in SI units."""

VERSION_MAJOR = 4
VERSION_MINOR = 4
VERSION_REVISION = 0
VERSION_BETA = True


def version_string() -> str:
    """Return the program version as shown in the start-up banner."""
    text = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_REVISION}"
    if VERSION_BETA:
        text += " (beta)"
    return text