"""
This module defines all printfmt features using a unified registry system.
The CLI and the API both dispatch through it.
"""

from typing import (
    Dict,
    Any,
    Callable,
    List,
    Optional,
    TypeVar,
    Generic,
)
from dataclasses import dataclass
import logging

from printfmt.error_msg import FormatError
from printfmt.formatter import Formatter

logger = logging.getLogger("printfmt.features")

T = TypeVar("T")


class OperationResult(Generic[T]):
    """Wrapper for operation results with success/error handling"""

    def __init__(
        self, success: bool, data: Optional[T] = None, error: Optional[str] = None
    ):
        self.success = success
        self.data = data
        self.error = error

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "OperationResult[T]":
        return cls(success=False, error=error)


@dataclass
class Feature:
    """Base class for all printfmt features"""

    name: str
    description: str
    handler: Callable


class FeatureRegistry:
    """Registry for all printfmt features"""

    _features: Dict[str, Feature] = {}

    @classmethod
    def register(cls, feature: Feature) -> Feature:
        """Register a new feature"""
        cls._features[feature.name] = feature
        return feature

    @classmethod
    def get_feature(cls, name: str) -> Optional[Feature]:
        """Get a feature by name"""
        return cls._features.get(name)

    @classmethod
    def get_all_features(cls) -> Dict[str, Feature]:
        """Get all registered features"""
        return cls._features.copy()


# ----------------- Feature Handlers -----------------


def handle_version(**kwargs) -> OperationResult[Dict[str, str]]:
    """Handle version request"""
    from printfmt.version import get_version

    return OperationResult.ok({"version": get_version()})


def handle_format(
    template: str,
    args: Optional[List[str]] = None,
    **kwargs,
) -> OperationResult[Dict[str, Any]]:
    """Format a template with raw ``value`` / ``name=value`` argument tokens"""
    args = list(args or [])
    try:
        formatter = Formatter(template, args)
        logger.debug("Template %r with %d argument(s)", template, len(args))
        output = formatter.generate()
        expected = formatter.expected_args()
        if expected != len(args):
            logger.debug("Template expects %d argument(s), got %d", expected, len(args))
        return OperationResult.ok({"output": output, "expected_args": expected})
    except FormatError as e:
        logger.debug("Formatting failed: %s", e)
        return OperationResult.fail(str(e))


# ----------------- Feature Registration -----------------

version_feature = FeatureRegistry.register(
    Feature(
        name="version",
        description="Show the printfmt version",
        handler=handle_version,
    )
)

format_feature = FeatureRegistry.register(
    Feature(
        name="format",
        description="Substitute arguments into a Rust-style format string",
        handler=handle_format,
    )
)
