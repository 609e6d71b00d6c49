# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-ConfigTree - Hierarchical configuration loaded from XML.

Configuration documents are merged into a tree of named values that are
read back by name and converted on demand to the type the caller asks
for (integers, floats, booleans, dates, colors, URIs, lists and maps).
"""

__version__ = "0.1.0"

from .conversion import (
    Color,
    Int16,
    Int32,
    Int64,
    Uri,
    convert_list,
    convert_mapping,
    convert_scalar,
)
from .exceptions import (
    ConfigurationError,
    ConversionError,
    DuplicateNameError,
    VersionMismatchError,
    XmlSyntaxError,
)
from .loader import ConfigurationLoader, ConfigurationSource
from .node import NodeContainer, ValueNode
from .tree import ConfigurationTree

__all__ = [
    # Core classes
    "ConfigurationTree",
    "ValueNode",
    "NodeContainer",
    # Loading
    "ConfigurationLoader",
    "ConfigurationSource",
    # Conversion
    "Color",
    "Uri",
    "Int16",
    "Int32",
    "Int64",
    "convert_scalar",
    "convert_list",
    "convert_mapping",
    # Exceptions
    "ConfigurationError",
    "ConversionError",
    "DuplicateNameError",
    "VersionMismatchError",
    "XmlSyntaxError",
]
