"""Generator capability settings."""

from pydantic import BaseModel, field_validator

DEFAULT_GENERATOR = "openapi-generator"

# First generator release that emits uuid/date-time/date/time schemas itself.
NATIVE_SEMANTIC_TYPES_SINCE = "2.0"


def parse_version(version: str) -> tuple[int, ...]:
    """Parse the numeric release part of a version like ``1.4.2``.

    Suffixes (``2.0.0-rc1``, ``2.0.0+local``) are not part of the result;
    see ``is_prerelease``.
    """
    parts = []
    for part in version.strip().split("."):
        digits = ""
        for ch in part:
            if not ch.isdigit():
                break
            digits += ch
        if not digits:
            break
        parts.append(int(digits))
        if digits != part:
            break
    if not parts:
        raise ValueError(f"Invalid version: {version!r}")
    return tuple(parts)


def is_prerelease(version: str) -> bool:
    """True for ``2.0.0-rc1``, ``2.0a1``, ``2.0.dev3`` and the like.

    Local build labels (``+build.5``) do not make a pre-release.
    """
    release = version.strip().split("+", 1)[0]
    numeric = ".".join(str(n) for n in parse_version(release))
    return release != numeric


class GeneratorInfo(BaseModel):
    """The document generator the host application runs."""

    name: str = DEFAULT_GENERATOR
    version: str
    native_semantic_types_since: str = NATIVE_SEMANTIC_TYPES_SINCE

    @field_validator("version", "native_semantic_types_since")
    @classmethod
    def _check_version(cls, value: str) -> str:
        parse_version(value)
        return value

    @property
    def handles_semantic_types(self) -> bool:
        version = _padded(parse_version(self.version))
        since = _padded(parse_version(self.native_semantic_types_since))
        if version == since and is_prerelease(self.version):
            # 2.0.0-rc1 comes before 2.0.0
            return False
        return version >= since


def _padded(version: tuple[int, ...], size: int = 3) -> tuple[int, ...]:
    return version + (0,) * (size - len(version))
