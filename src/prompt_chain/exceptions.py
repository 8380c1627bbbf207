"""Exception types raised by the chain engine."""

from __future__ import annotations


class PromptChainError(Exception):
    pass


class SchemaSyntaxError(PromptChainError, ValueError):
    pass


class ProviderCallError(PromptChainError, RuntimeError):
    pass


class MissingCredentialError(PromptChainError, RuntimeError):
    pass


class UnsupportedProviderError(PromptChainError, ValueError):
    pass
