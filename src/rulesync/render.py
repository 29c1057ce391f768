"""Canonical rules document and shadow pointer text.

Pure text construction, no I/O. The canonical document is regenerated on every
sync pass; the pointer text is what each IDE-specific shadow file receives.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rulesync.core.models import StatsRecord

CANONICAL_FILENAME = "RULES.md"

# Conventional location of the canonical document relative to the repo root.
# Any shadow file mentioning it counts as already synced.
POINTER_MARKER = f".gitnexus/{CANONICAL_FILENAME}"

RULES_TEMPLATE = """\
# GitNexus MCP Integration

This project is indexed by GitNexus, providing AI agents with deep code intelligence.

## Project: {project_name}

**Index Stats:**
- Files: {files}
- Symbols: {nodes}
- Relationships: {edges}
- Communities: {communities}
- Processes: {processes}

## Available MCP Tools

When working with this codebase, use these GitNexus tools:

### `context`
Get codebase overview and stats. **Call this first** to understand the project structure.

### `search`
Hybrid semantic + keyword search across the codebase.
- Returns symbols with their graph connections
- Groups results by process

```
Example: search for "authentication middleware"
```

### `cypher`
Execute Cypher queries on the code knowledge graph.

**Schema:**
- Nodes: `File`, `Function`, `Class`, `Interface`, `Method`, `Community`, `Process`
- Relations: `CALLS`, `IMPORTS`, `EXTENDS`, `IMPLEMENTS`, `DEFINES`, `MEMBER_OF`, `STEP_IN_PROCESS`

```cypher
// Find all callers of a function
MATCH (caller)-[:CodeRelation {{type: 'CALLS'}}]->(f:Function {{name: "myFunction"}})
RETURN caller.name, caller.filePath
```

### `overview`
List all communities (functional clusters) and processes (execution flows).

### `explore`
Deep dive on a specific symbol, cluster, or process.
- `type: "symbol"` - Get callers, callees, community membership
- `type: "cluster"` - Get all members of a functional cluster
- `type: "process"` - Get step-by-step execution trace

### `impact`
Analyze change impact before modifying code.
- `direction: "upstream"` - What depends on this symbol (will break if changed)
- `direction: "downstream"` - What this symbol depends on

## Best Practices

1. **Always call `context` first** when starting a new conversation
2. **Use `search` for discovery** - semantic search understands intent
3. **Use `impact` before refactoring** - understand blast radius
4. **Use `explore` for deep dives** - understand symbol context
5. **Use `cypher` for complex queries** - full graph power

## Graph Concepts

- **Community**: Functional cluster detected by Leiden algorithm (e.g., "Auth", "Database", "API")
- **Process**: Execution flow from entry point to terminal (e.g., "HandleRequest → ValidateUser → SaveToDb")
- **Confidence**: Relationship confidence score (1.0 = certain, <0.8 = fuzzy match)
"""

POINTER_TEMPLATE = """\
# AI Agent Rules

Follow {marker} for all project context and coding guidelines.

This project uses GitNexus MCP for code intelligence. See {marker} for available tools and best practices.
"""


def render_rules_content(
    project_name: str,
    stats: StatsRecord | Mapping[str, Any] | None = None,
) -> str:
    """Render the canonical rules document.

    Args:
        project_name: Display name substituted into the header.
        stats: Index statistics. Missing counts render as 0.

    Returns:
        Full Markdown text of the document.
    """
    if not isinstance(stats, StatsRecord):
        stats = StatsRecord.from_mapping(stats)
    counts = {key: value or 0 for key, value in stats.to_dict().items()}
    return RULES_TEMPLATE.format(project_name=project_name, **counts)


def render_pointer_content() -> str:
    """Render the pointer text shared by every shadow file."""
    return POINTER_TEMPLATE.format(marker=POINTER_MARKER)
