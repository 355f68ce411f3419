from __future__ import annotations

from typing import List

import typer
from tabulate import tabulate

from kubetoken.kubeconfig.store import ContextEntry, KubeconfigStore

CURRENT_MARKER = "*"


def format_contexts(entries: List[ContextEntry], color: bool = False) -> str:
    """
    Renders one line per context. The current context is marked with an
    asterisk and, when color is enabled, shown in bold green.
    """
    lines = []
    for entry in entries:
        if entry.is_current:
            line = f"{CURRENT_MARKER} {entry.name}"
            if color:
                line = typer.style(line, fg=typer.colors.GREEN, bold=True)
        else:
            line = f"  {entry.name}"
        lines.append(line)
    return "\n".join(lines)


def format_contexts_table(store: KubeconfigStore) -> str:
    entries = store.list_contexts()
    table = [
        [
            CURRENT_MARKER if entry.is_current else "",
            entry.name,
            named_context.context.cluster,
            named_context.context.user,
            named_context.context.namespace or "",
        ]
        for entry, named_context in zip(entries, store.contexts)
    ]
    return tabulate(
        table, headers=["CURRENT", "NAME", "CLUSTER", "USER", "NAMESPACE"]
    )
