"""Package versions and version constraints.

Versions follow semantic versioning (``1.2.3-beta.1+build``). Branch
versions (``~master``) name a repository branch; they sort before every
numbered version, so the newest release always ranks highest, and only
explicit branch constraints or ``*`` match them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_VERSION_RE = re.compile(
    r"^v?(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)
_TERM_RE = re.compile(r"^(?P<op>>=|<=|==|>|<)?(?P<version>.+)$")

BRANCH_PREFIX = "~"


@dataclass(frozen=True, eq=False)
class Version:
    """A semantic version or a branch name."""

    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: tuple[str, ...] = ()
    build: str = ""
    branch: str = ""
    # Number of numeric components spelled out (1 to 3), used by ``~>``.
    precision: int = field(default=3, compare=False)

    @classmethod
    def parse(cls, text: str, partial: bool = False) -> Version:
        """Parse a version string.

        Args:
            text: Version such as ``1.2.3``, ``v2.0.0-rc.1`` or ``~master``
            partial: Accept ``1`` and ``1.2``, filling missing parts with zero

        Raises:
            ValueError: If the text is not a version
        """
        text = text.strip()
        if text.startswith(BRANCH_PREFIX) and len(text) > 1 and not text.startswith("~>"):
            return cls(branch=text[1:])
        match = _VERSION_RE.match(text)
        if match is None:
            raise ValueError(f"Invalid version: {text!r}")
        precision = 1 + (match["minor"] is not None) + (match["patch"] is not None)
        if precision < 3 and not partial:
            raise ValueError(f"Incomplete version: {text!r}")
        return cls(
            major=int(match["major"]),
            minor=int(match["minor"] or 0),
            patch=int(match["patch"] or 0),
            prerelease=tuple(match["pre"].split(".")) if match["pre"] else (),
            build=match["build"] or "",
            precision=precision,
        )

    @property
    def is_branch(self) -> bool:
        return bool(self.branch)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def _key(self) -> tuple:
        if self.branch:
            return (0, self.branch)
        pre = tuple((0, int(p), "") if p.isdigit() else (1, 0, p) for p in self.prerelease)
        return (1, (self.major, self.minor, self.patch), not self.prerelease, pre)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: Version) -> bool:
        return self._key() < other._key()

    def __le__(self, other: Version) -> bool:
        return self._key() <= other._key()

    def __gt__(self, other: Version) -> bool:
        return self._key() > other._key()

    def __ge__(self, other: Version) -> bool:
        return self._key() >= other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        if self.branch:
            return BRANCH_PREFIX + self.branch
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + self.build
        return text


_COMPARATORS = {
    ">=": Version.__ge__,
    ">": Version.__gt__,
    "<=": Version.__le__,
    "<": Version.__lt__,
    "==": Version.__eq__,
}


@dataclass(frozen=True)
class VersionConstraint:
    """A set of acceptable versions.

    Supported spellings:
        ``*`` or ``any``       every version
        ``1.2.3``, ``==1.2.3`` exactly that version
        ``>=1.0.0 <2.0.0``     all comparison terms must hold
        ``~>1.2.3``            ``>=1.2.3 <1.3.0``
        ``~>1.2``              ``>=1.2.0 <2.0.0``
        ``^1.2.3``             ``>=1.2.3 <2.0.0`` (``^0.2.3`` stays below ``0.3.0``)
        ``~master``            the branch ``master``
    """

    text: str
    terms: tuple[tuple[str, Version], ...] = ()
    branch: str = ""

    @classmethod
    def parse(cls, text: str) -> VersionConstraint:
        spec = text.strip()
        if spec in ("", "*", "any"):
            return cls(text=spec or "*")
        if spec.startswith("~>"):
            return cls(text=spec, terms=_tilde_terms(Version.parse(spec[2:], partial=True)))
        if spec.startswith("^"):
            return cls(text=spec, terms=_caret_terms(Version.parse(spec[1:], partial=True)))
        if spec.startswith(BRANCH_PREFIX):
            return cls(text=spec, branch=Version.parse(spec).branch)

        terms = []
        for part in spec.split():
            match = _TERM_RE.match(part)
            if match is None:
                raise ValueError(f"Invalid version constraint: {text!r}")
            terms.append((match["op"] or "==", Version.parse(match["version"], partial=True)))
        return cls(text=spec, terms=tuple(terms))

    @property
    def is_any(self) -> bool:
        return not self.terms and not self.branch

    def matches(self, version: Version) -> bool:
        if self.is_any:
            return True
        if self.branch or version.is_branch:
            return version.branch == self.branch
        return all(_COMPARATORS[op](version, bound) for op, bound in self.terms)

    def __str__(self) -> str:
        return self.text


def _upper(major: int, minor: int = 0) -> Version:
    # "-0" is the lowest pre-release, so pre-releases of the bound are excluded too.
    return Version(major=major, minor=minor, prerelease=("0",))


def _tilde_terms(base: Version) -> tuple[tuple[str, Version], ...]:
    if base.precision == 3:
        upper = _upper(base.major, base.minor + 1)
    else:
        upper = _upper(base.major + 1)
    return ((">=", base), ("<", upper))


def _caret_terms(base: Version) -> tuple[tuple[str, Version], ...]:
    if base.major == 0:
        upper = _upper(0, base.minor + 1)
    else:
        upper = _upper(base.major + 1)
    return ((">=", base), ("<", upper))
