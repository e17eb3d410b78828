"""Mercurial VCS implementation for vcs-fetch."""

from vcs_fetch.vcs.mercurial.manager import MercurialVcs

__all__ = [
    "MercurialVcs",
]
