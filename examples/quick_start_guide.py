#!/usr/bin/env python3
"""
Quick Start Guide for XML Tree Query.

Decodes a storage-service container listing into plain records using the
module-level functions first and the configured TreeQuery engine second.
"""

import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from xml_tree_query import (
    ConversionError,
    EngineConfig,
    FieldSpec,
    PathNotFoundError,
    TreeQuery,
    cast_must,
    cast_optional,
    inner_text,
    parse_document,
    traverse,
    traverse_single_optional,
)
from xml_tree_query.query import U64
from xml_tree_query.shared import attach_query_handler

LISTING = """<?xml version="1.0" encoding="UTF-8"?>
<EnumerationResults ServiceEndpoint="http://example.blob.core.windows.net/">
  <Containers>
    <Container>
      <Name>pippo</Name>
      <Properties>
        <Last-Modified>Mon, 23 Nov 2015 21:12:35 GMT</Last-Modified>
        <LeaseStatus>unlocked</LeaseStatus>
        <SomeNumber>256</SomeNumber>
      </Properties>
    </Container>
    <Container>
      <Name>pluto</Name>
      <Properties>
        <Last-Modified>Mon, 23Nov 2015 21:12:35 GMT</Last-Modified>
        <LeaseStatus>locked</LeaseStatus>
      </Properties>
    </Container>
  </Containers>
  <NextMarker />
</EnumerationResults>"""


class LeaseStatus(Enum):
    LOCKED = "locked"
    UNLOCKED = "unlocked"


def module_level_example():
    """Level 1: plain functions with default settings."""

    print("🚀 QUICK START - XML Tree Query")
    print("=" * 45)

    root = parse_document(LISTING)
    containers = traverse(root, ("Containers", "Container"))
    print(f"✅ Found {len(containers)} containers")

    for container in containers:
        name = cast_must(container, ("Name",), str)
        status = cast_must(container, ("Properties", "LeaseStatus"), LeaseStatus)
        modified = cast_optional(container, ("Properties", "Last-Modified"), datetime)
        number = cast_optional(container, ("Properties", "SomeNumber"), U64)
        print(f"  - {name}: {status.name}, modified={modified}, number={number}")

    marker = traverse_single_optional(root, ("NextMarker",))
    print(f"📄 Next marker: {inner_text(marker)!r}")

    try:
        cast_must(root, ("Containers", "Missing"), str)
    except PathNotFoundError as e:
        print(f"⚠️  {e} (path={e.path})")


def engine_example():
    """Level 2: a configured engine with string paths and records."""

    print("\n⚡ Configured engine")
    print("-" * 30)

    config = EngineConfig().override(query__path_separator=".")
    query = TreeQuery(config, correlation_id="list-containers")
    root = query.parse(LISTING)

    fields = [
        FieldSpec("name", "Name"),
        FieldSpec("lease_status", "Properties/LeaseStatus", LeaseStatus),
        FieldSpec("some_number", "Properties/SomeNumber", U64, required=False),
    ]
    for record in query.extract_records(root, "Containers.Container", fields):
        print(f"  - {record}")

    strict = TreeQuery(EngineConfig.strict())
    pluto = strict.traverse(strict.parse(LISTING), "Containers/Container")[1]
    try:
        strict.cast_optional(pluto, "Properties/Last-Modified", datetime)
    except ConversionError as e:
        print(f"⚠️  strict engine: {type(e).__name__}: {e}")


if __name__ == "__main__":
    attach_query_handler(level=logging.INFO)
    module_level_example()
    engine_example()
