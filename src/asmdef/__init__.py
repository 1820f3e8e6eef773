"""Assembly definition descriptors, catalogs and the module name index."""

from asmdef.catalog import ModuleCatalog, ProjectCatalog, StaticCatalog, read_meta_guid
from asmdef.index import ModuleIndex, resolve_reference
from asmdef.models import (
    AsmdefData,
    DescriptorError,
    GuidReference,
    NameReference,
    ReferenceToken,
    parse_asmdef,
    parse_reference,
)

__all__ = [
    "AsmdefData",
    "DescriptorError",
    "GuidReference",
    "ModuleCatalog",
    "ModuleIndex",
    "NameReference",
    "ProjectCatalog",
    "ReferenceToken",
    "StaticCatalog",
    "parse_asmdef",
    "parse_reference",
    "read_meta_guid",
    "resolve_reference",
]
