"""
Tests for the command line interface.
"""
import json

import pytest

from adoclinks.cli import main
from adoclinks.extractors.normalization import node_id


@pytest.fixture
def corpus(tmp_path):
    (tmp_path / "a.adoc").write_text("= Alpha\n\ninclude::b.adoc[]\n")
    (tmp_path / "b.adoc").write_text("= Beta\n\nxref:a.adoc[back]\n")
    (tmp_path / "draft.asciidoc").write_text("no title here\n")
    return tmp_path


class TestBuild:
    def test_dot_to_file(self, corpus, tmp_path):
        output = tmp_path / "out" / "graph.dot"
        assert main(["build", str(corpus), "-o", str(output), "-q"]) == 0

        dot = output.read_text()
        a, b = node_id(str(corpus / "a.adoc")), node_id(str(corpus / "b.adoc"))
        assert dot.startswith("digraph g {")
        assert f'"{a}" [label="Alpha"];' in dot
        assert f'"{a}" -> "{b}";' in dot
        assert f'"{b}" -> "{a}";' in dot

    def test_json_to_stdout(self, corpus, capsys):
        assert main(["build", str(corpus), "--format", "json", "-q"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert sorted(n["label"] for n in data["nodes"]) == ["Alpha", "Beta"]
        assert sorted(e["type"] for e in data["edges"]) == ["include", "link"]

    def test_title_max_length_override(self, corpus, capsys):
        assert main(["build", str(corpus), "--format", "json", "--title-max-length", "2", "-q"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert sorted(n["label"] for n in data["nodes"]) == ["Al...", "Be..."]

    def test_config_file(self, corpus, tmp_path, capsys):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"file_types": ["asciidoc"]}))
        (corpus / "c.asciidoc").write_text("= Gamma\n")

        assert main(["build", str(corpus), "--format", "json", "--config", str(config), "-q"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [n["label"] for n in data["nodes"]] == ["Gamma"]

    def test_missing_root(self, tmp_path):
        assert main(["build", str(tmp_path / "nope"), "-q"]) == 1

    def test_invalid_config(self, corpus, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"colors": "dark"}))
        assert main(["build", str(corpus), "--config", str(config), "-q"]) == 1


class TestResolve:
    def test_known_name(self, corpus, capsys):
        assert main(["resolve", str(corpus), "b", "-q"]) == 0
        assert capsys.readouterr().out.strip() == str(corpus / "b.adoc")

    def test_unknown_name(self, corpus):
        assert main(["resolve", str(corpus), "zeta", "-q"]) == 1
