"""Tests for flowchart text import."""

import pytest

from taskcanvas import FlowDirection, TaskStatus, flowchart_to_canvas, parse_flowchart
from taskcanvas.constants import GRID_SPACING_X, GRID_SPACING_Y
from taskcanvas.flowchart import extract_label, extract_node_id, is_directive, parse_edge, parse_node


def node_pairs(graph):
    return [(node.id, node.label) for node in graph.nodes]


def edge_triples(graph):
    return [(edge.source, edge.target, edge.label) for edge in graph.edges]


class TestHelpers:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("A", "A"),
            ("A[Start]", "A"),
            ("  node1{Check}  ", "node1"),
            ("B(Round)", "B"),
            ("C>Flag]", "C"),
            ("D/Slanted/", "D"),
            ("[orphan]", None),
            ("", None),
        ],
    )
    def test_extract_node_id(self, text, expected):
        assert extract_node_id(text) == expected

    def test_extract_label(self):
        assert extract_label("A[Start] --> B{Is it ok?}", "A") == "Start"
        assert extract_label("A[Start] --> B{Is it ok?}", "B") == "Is it ok?"
        assert extract_label("A --> B", "A") is None

    def test_extract_label_ignores_blank_brackets(self):
        assert extract_label("A[ ] --> B", "A") is None

    def test_parse_edge_with_label(self):
        edge = parse_edge("A -->| ships to | B")
        assert (edge.source, edge.target, edge.label) == ("A", "B", "ships to")

    def test_parse_edge_without_arrow(self):
        assert parse_edge("A[Just a node]") is None

    def test_parse_edge_missing_side(self):
        assert parse_edge("--> B") is None

    def test_parse_node(self):
        node = parse_node("Start([Begin here])")
        assert node.id == "Start"
        assert parse_node("bare") is None


class TestParseFlowchart:
    def test_simple_chart(self):
        graph = parse_flowchart(
            """graph TD
            A[Start] --> B{Decision}
            B -->|yes| C[Done]
            """
        )
        assert graph.direction == FlowDirection.TOP_DOWN
        assert node_pairs(graph) == [("A", "Start"), ("B", "Decision"), ("C", "Done")]
        assert edge_triples(graph) == [("A", "B", ""), ("B", "C", "yes")]

    def test_left_right_header(self):
        graph = parse_flowchart("graph LR\nA --> B")
        assert graph.direction == FlowDirection.LEFT_RIGHT

    def test_right_left_header_is_horizontal(self):
        graph = parse_flowchart("graph RL\nA --> B")
        assert graph.direction == FlowDirection.LEFT_RIGHT

    def test_flowchart_keyword(self):
        graph = parse_flowchart("flowchart TB\nA --> B")
        assert graph.direction == FlowDirection.TOP_DOWN
        assert len(graph.nodes) == 2

    @pytest.mark.parametrize("text", ["", "   \n  ", "sequenceDiagram\nA->>B: hi", "graph TD"])
    def test_rejects_non_charts(self, text):
        assert parse_flowchart(text) is None

    def test_header_only_with_comments(self):
        assert parse_flowchart("graph TD\n%% nothing here") is None

    def test_nodes_are_deduplicated(self):
        graph = parse_flowchart("graph TD\nA --> B\nB --> A\nA --> C")
        assert [node.id for node in graph.nodes] == ["A", "B", "C"]
        assert len(graph.edges) == 3

    def test_first_label_wins(self):
        graph = parse_flowchart("graph TD\nA[First] --> B\nA[Second] --> C")
        assert graph.nodes[0].label == "First"

    def test_skipped_lines(self):
        graph = parse_flowchart(
            """graph TD
            %% a comment --> ignored
            style A fill:#f9f
            classDef hot fill:#f00
            class A hot
            linkStyle 0 stroke:#ff3
            subgraph Group
            A --> B
            end
            """
        )
        assert [node.id for node in graph.nodes] == ["A", "B"]
        assert edge_triples(graph) == [("A", "B", "")]

    def test_ids_starting_with_directive_words(self):
        graph = parse_flowchart("graph TD\nclassify --> store\nstyler[Styler] --> store")
        assert node_pairs(graph) == [("classify", "classify"), ("store", "store"), ("styler", "Styler")]
        assert len(graph.edges) == 2

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("%% note", True),
            ("%%no space", True),
            ("style A fill:#f9f", True),
            ("classDef hot fill:#f00", True),
            ("subgraph", True),
            ("subgraphs --> x", False),
            ("linkStyler --> x", False),
        ],
    )
    def test_is_directive(self, line, expected):
        assert is_directive(line) is expected

    @pytest.mark.parametrize("arrow", ["-->", "--->", "-.->", "==>", "---"])
    def test_arrow_variants(self, arrow):
        graph = parse_flowchart(f"graph TD\nA{arrow}B")
        assert edge_triples(graph) == [("A", "B", "")]

    def test_standalone_declarations(self):
        graph = parse_flowchart("graph TD\nA[Alone]\nB(Also alone)\nC")
        assert node_pairs(graph) == [("A", "Alone"), ("B", "Also alone")]
        assert graph.edges == []

    def test_bracket_styles(self):
        graph = parse_flowchart("graph LR\nA(Round) --> B>Flag]\nB --> C{Choice}")
        assert node_pairs(graph) == [("A", "Round"), ("B", "Flag"), ("C", "Choice")]

    def test_larger_chart(self):
        graph = parse_flowchart(
            """flowchart TD
                Start([Begin]) --> Fetch[Fetch data]
                Fetch --> Valid{Valid?}
                Valid -->|no| Fetch
                Valid -->|yes| Store[(Database)]
                Store -.-> Report[Report]
            """
        )
        assert [node.id for node in graph.nodes] == ["Start", "Fetch", "Valid", "Store", "Report"]
        assert graph.nodes[1].label == "Fetch data"
        assert edge_triples(graph)[2] == ("Valid", "Fetch", "no")
        assert len(graph.edges) == 5


class TestFlowchartToCanvas:
    def test_left_right_positions(self):
        graph = parse_flowchart("graph LR\nA[One] --> B[Two]\nB --> C[Three]")
        tasks, connections = flowchart_to_canvas(graph)
        assert [task.title for task in tasks] == ["One", "Two", "Three"]
        assert [(task.x, task.y) for task in tasks] == [
            (0.0, 0.0), (GRID_SPACING_X, 0.0), (2 * GRID_SPACING_X, 0.0),
        ]
        assert all(task.status == TaskStatus.BACKLOG for task in tasks)
        assert len(connections) == 2

    def test_top_down_columns(self):
        graph = parse_flowchart("graph TD\nA --> B\nB --> C\nC --> D")
        tasks, _ = flowchart_to_canvas(graph)
        assert [(task.x, task.y) for task in tasks] == [
            (0.0, 0.0),
            (0.0, GRID_SPACING_Y),
            (0.0, 2 * GRID_SPACING_Y),
            (GRID_SPACING_X, 0.0),
        ]

    def test_connections_use_task_ids(self):
        graph = parse_flowchart("graph TD\nA[Build] -->|then| B[Ship]")
        tasks, connections = flowchart_to_canvas(graph, TaskStatus.PLANNING)
        assert connections[0].from_task_id == tasks[0].id
        assert connections[0].to_task_id == tasks[1].id
        assert connections[0].label == "then"
        assert tasks[0].status == TaskStatus.PLANNING

    def test_task_ids_are_unique(self):
        graph = parse_flowchart("graph TD\nA --> B\nB --> C\nC --> D\nD --> E")
        tasks, _ = flowchart_to_canvas(graph)
        assert len({task.id for task in tasks}) == len(tasks)
