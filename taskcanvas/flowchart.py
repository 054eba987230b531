"""Lightweight flowchart text import.

Understands the small subset of Mermaid flowchart syntax needed to seed a
canvas: a ``graph``/``flowchart`` header, ``A --> B`` style edges with
optional ``|label|`` text, and bracketed node declarations such as
``A[Label]`` or ``B{Decision}``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .layout import flow_positions
from .types import FlowDirection, Task, TaskConnection, TaskStatus

logger = logging.getLogger(__name__)

# Longer arrows first so "--->" is not read as "-" followed by "-->"
ARROW_RE = re.compile(r"--->|-->|-\.->|==>|---")
ID_TERMINATORS = "[{(>/"
LABEL_DELIMITERS: Tuple[Tuple[str, str], ...] = (("[", "]"), ("{", "}"), ("(", ")"), (">", "]"))
COMMENT_PREFIX = "%%"
DIRECTIVES = frozenset({"style", "class", "classDef", "linkStyle", "subgraph"})


@dataclass
class FlowNode:
    id: str
    label: str


@dataclass
class FlowEdge:
    source: str
    target: str
    label: str = ""


@dataclass
class FlowGraph:
    direction: FlowDirection
    nodes: List[FlowNode] = field(default_factory=list)
    edges: List[FlowEdge] = field(default_factory=list)


def is_directive(line: str) -> bool:
    """True for comments and styling lines, which declare no nodes.

    A directive keyword only counts as a whole word, so ids such as
    ``classify`` or ``styler`` still parse.
    """
    if line.startswith(COMMENT_PREFIX):
        return True
    words = line.split(None, 1)
    return bool(words) and words[0] in DIRECTIVES


def extract_node_id(text: str) -> Optional[str]:
    """Return the id part of a node reference like ``A`` or ``A[Label]``."""
    text = text.strip()
    end = len(text)
    for idx, char in enumerate(text):
        if char in ID_TERMINATORS:
            end = idx
            break
    node_id = text[:end].strip()
    return node_id or None


def extract_label(line: str, node_id: str) -> Optional[str]:
    """Return the bracketed label written right after ``node_id`` in a line."""
    for open_char, close_char in LABEL_DELIMITERS:
        start = line.find(node_id + open_char)
        if start < 0:
            continue
        label_start = start + len(node_id) + 1
        end = line.find(close_char, label_start)
        if end < 0:
            continue
        label = line[label_start:end].strip()
        if label:
            return label
    return None


def parse_edge(line: str) -> Optional[FlowEdge]:
    match = ARROW_RE.search(line)
    if match is None:
        return None

    left = line[:match.start()].strip()
    right = line[match.end():].strip()

    label = ""
    if right.startswith("|"):
        end_pipe = right.find("|", 1)
        if end_pipe >= 0:
            label = right[1:end_pipe].strip()
            right = right[end_pipe + 1:].strip()

    source = extract_node_id(left)
    target = extract_node_id(right)
    if source is None or target is None:
        return None
    return FlowEdge(source, target, label)


def parse_node(line: str) -> Optional[FlowNode]:
    """Parse a standalone declaration; a bare id on its own line is ignored."""
    if not any(char in line for char in "[{("):
        return None
    node_id = extract_node_id(line)
    if node_id is None:
        return None
    return FlowNode(node_id, extract_label(line, node_id) or node_id)


def parse_flowchart(text: str) -> Optional[FlowGraph]:
    """Parse flowchart text into nodes and edges.

    Args:
        text: Multi-line flowchart source.

    Returns:
        The parsed graph, or None when the header is missing or no node
        was found. A failed parse never yields a partial graph.
    """
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return None

    header = lines[0].lower()
    if not (header.startswith("graph") or header.startswith("flowchart")):
        logger.debug("Not a flowchart: %r", lines[0])
        return None
    if "lr" in header or "rl" in header:
        graph = FlowGraph(FlowDirection.LEFT_RIGHT)
    else:
        graph = FlowGraph(FlowDirection.TOP_DOWN)

    seen = set()

    def register(node: FlowNode) -> None:
        if node.id not in seen:
            seen.add(node.id)
            graph.nodes.append(node)

    for line in lines[1:]:
        if is_directive(line):
            continue
        edge = parse_edge(line)
        if edge is not None:
            register(FlowNode(edge.source, extract_label(line, edge.source) or edge.source))
            register(FlowNode(edge.target, extract_label(line, edge.target) or edge.target))
            graph.edges.append(edge)
            continue
        node = parse_node(line)
        if node is not None:
            register(node)

    if not graph.nodes:
        return None
    return graph


def flowchart_to_canvas(
    graph: FlowGraph,
    status: TaskStatus = TaskStatus.BACKLOG,
) -> Tuple[List[Task], List[TaskConnection]]:
    """Turn a parsed flowchart into positioned tasks and their connections."""
    tasks: List[Task] = []
    task_ids: Dict[str, str] = {}
    for node, (x, y) in zip(graph.nodes, flow_positions(len(graph.nodes), graph.direction)):
        task = Task.create(node.label, status, x, y)
        tasks.append(task)
        task_ids[node.id] = task.id

    connections = []
    for edge in graph.edges:
        from_id = task_ids.get(edge.source)
        to_id = task_ids.get(edge.target)
        if from_id and to_id:
            connections.append(TaskConnection.create(from_id, to_id, edge.label))
    return tasks, connections
