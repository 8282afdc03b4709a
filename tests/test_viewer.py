"""
Tests for viewer state: no-op snapshot detection and file navigation.
"""
import pytest

from adoclinks.extractors.graph_store import GraphSnapshot
from adoclinks.extractors.protocols import Edge, Node, INCLUDE, LINK
from adoclinks.viewer import (
    ViewerState, fix_slashes, normalize_navigation_path, same_edges, same_nodes, same_snapshot
)

A = Node("ida", "/docs/a.adoc", "A")
B = Node("idb", "/docs/b.adoc", "B")
AB = Edge("ida", "idb", LINK)
BA = Edge("idb", "ida", INCLUDE)


def snap(nodes, edges):
    return GraphSnapshot(nodes=tuple(nodes), edges=tuple(edges))


class TestComparisons:
    def test_same_nodes_order_insensitive(self):
        assert same_nodes([A, B], [B, A])

    def test_label_change_detected(self):
        assert not same_nodes([A, B], [A, Node("idb", "/docs/b.adoc", "B2")])

    def test_node_count_change_detected(self):
        assert not same_nodes([A, B], [A])

    def test_shared_id_label_loss_detected(self):
        # x.adoc and x.asciidoc map to one node id
        x_adoc = Node("idx", "/docs/x.adoc", "X adoc")
        x_asciidoc = Node("idx", "/docs/x.asciidoc", "X asciidoc")
        assert not same_nodes([x_adoc, x_asciidoc], [x_asciidoc, x_asciidoc])
        assert same_nodes([x_adoc, x_asciidoc], [x_asciidoc, x_adoc])

    def test_same_edges_order_insensitive(self):
        assert same_edges([AB, BA], [BA, AB])

    def test_edge_type_change_detected(self):
        assert not same_edges([AB], [Edge("ida", "idb", INCLUDE)])

    def test_edge_multiplicity_counts(self):
        assert not same_edges([AB, AB, BA], [AB, BA, BA])

    def test_no_previous_snapshot(self):
        assert not same_snapshot(None, snap([A], []))


class TestViewerState:
    def test_refresh(self):
        state = ViewerState()
        assert state.refresh(snap([A, B], [AB])) is True
        # Same content, different order: no re-layout
        assert state.refresh(snap([B, A], [AB])) is False
        assert state.refresh(snap([A, B], [AB, BA])) is True

    def test_open_file_marks_active(self):
        state = ViewerState(windows=False)
        state.refresh(snap([A, B], [AB]))
        assert state.open_file("/docs/b.adoc") == "idb"
        assert state.active_id == "idb"

    def test_removed_node_clears_active(self):
        state = ViewerState(windows=False)
        state.refresh(snap([A, B], [AB]))
        state.open_file("/docs/b.adoc")
        assert state.refresh(snap([A], [])) is True
        assert state.active_id is None

    def test_surviving_node_stays_active(self):
        state = ViewerState(windows=False)
        state.refresh(snap([A, B], [AB]))
        state.open_file("/docs/b.adoc")
        state.refresh(snap([A, Node("idb", "/docs/b.adoc", "B2")], []))
        assert state.active_id == "idb"

    def test_open_file_strips_git_suffix(self):
        state = ViewerState(windows=False)
        state.refresh(snap([A], []))
        assert state.open_file("/docs/a.adoc.git") == "ida"

    def test_open_unknown_file_clears_active(self):
        state = ViewerState(windows=False)
        state.refresh(snap([A], []))
        state.open_file("/docs/a.adoc")
        assert state.open_file("/docs/other.adoc") is None
        assert state.active_id is None

    def test_open_file_before_any_snapshot(self):
        assert ViewerState().open_file("/docs/a.adoc") is None

    def test_open_file_on_windows(self):
        node = Node("idw", "C:\\docs/sub/w.adoc", "W")
        state = ViewerState(windows=True)
        state.refresh(snap([node], []))
        assert state.open_file("C:\\docs\\sub\\w.adoc") == "idw"


class TestPathHelpers:
    @pytest.mark.parametrize("path, expected", [
        ("/repo.git", "/repo"),
        ("/docs/a.adoc", "/docs/a.adoc"),
        ("/docs/a.adoc.git", "/docs/a.adoc"),
    ])
    def test_normalize_navigation_path(self, path, expected):
        assert normalize_navigation_path(path) == expected

    def test_fix_slashes_windows_drive(self):
        assert fix_slashes("C:\\docs/a.adoc", windows=True) == "C:\\docs\\a.adoc"

    def test_fix_slashes_posix_untouched(self):
        assert fix_slashes("/docs/a.adoc", windows=True) == "/docs/a.adoc"
        assert fix_slashes("C:\\docs/a.adoc", windows=False) == "C:\\docs/a.adoc"
