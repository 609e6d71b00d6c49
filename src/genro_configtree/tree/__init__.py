# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ConfigurationTree package - merged configuration documents.

This package provides the ConfigurationTree class, the forest of
top-level ValueNode entries produced by merging one or more XML
documents, with version negotiation and name collision checks.

Example:
    >>> from genro_configtree import ConfigurationTree
    >>> tree = ConfigurationTree().merge(
    ...     '<Configuration Version="1.0"><Port>8080</Port></Configuration>'
    ... )
    >>> tree['Port'].as_int()
    8080
"""

from .core import ConfigurationTree

__all__ = ["ConfigurationTree"]
