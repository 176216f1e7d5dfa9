"""
Unit tests for SLDAExporter
"""

import json
from unittest.mock import Mock

import pytest

from corpuskit.core.document import Document
from corpuskit.reporting.slda_export import (
    SLDAExportConfig,
    SLDAExporter,
    load_label_mapping,
)
from corpuskit.utils.invertible_map import LabelIndex


@pytest.fixture
def corpus(doc_a, doc_b, doc_factory):
    c = doc_factory("corpus/sports/c.txt", 3, {"term4": 5}, label="sports")
    return [doc_a, doc_b, c]


class TestExporterInitialization:

    def test_init_default(self):
        exporter = SLDAExporter()

        assert exporter.config == SLDAExportConfig()
        assert isinstance(exporter.label_mapping, LabelIndex)
        assert exporter.log is not None

    def test_init_custom_log(self):
        mock_log = Mock()
        exporter = SLDAExporter(log_function=mock_log)
        assert exporter.log == mock_log


class TestLines:

    def test_label_lines_share_mapping(self, corpus):
        exporter = SLDAExporter()

        assert exporter.label_lines(corpus) == ["0", "1", "0"]
        assert exporter.label_lines(list(reversed(corpus))) == ["0", "1", "0"]

    def test_term_lines(self, corpus):
        lines = SLDAExporter().term_lines(corpus)

        assert len(lines) == 3
        assert lines[2] == "1 term4:5"


class TestExport:

    def test_export_writes_files(self, corpus, tmp_path):
        mock_log = Mock()
        cfg = SLDAExportConfig(output_dir=str(tmp_path / "out"))
        exporter = SLDAExporter(cfg, log_function=mock_log)

        summary = exporter.export(corpus)

        assert summary.documents == 3
        assert summary.labels == {"sports": 0, "politics": 1}

        term_lines = (tmp_path / "out" / "slda-data.dat").read_text(encoding="utf-8").splitlines()
        label_lines = (tmp_path / "out" / "slda-labels.dat").read_text(encoding="utf-8").splitlines()
        assert term_lines == [d.get_slda_term_data() for d in corpus]
        assert label_lines == ["0", "1", "0"]

        with open(summary.mapping_path, encoding="utf-8") as f:
            assert json.load(f) == {"sports": 0, "politics": 1}
        mock_log.assert_called_once()

    def test_export_reuses_loaded_mapping(self, corpus, tmp_path):
        first = SLDAExporter(SLDAExportConfig(output_dir=str(tmp_path / "train")), log_function=Mock())
        summary = first.export(corpus[1:])  # politics first

        mapping = load_label_mapping(summary.mapping_path)
        second = SLDAExporter(SLDAExportConfig(output_dir=str(tmp_path / "test")),
                              label_mapping=mapping, log_function=Mock())
        doc = Document("new.txt", 50, "tech")
        second.export([corpus[0], doc])

        labels = (tmp_path / "test" / "slda-labels.dat").read_text(encoding="utf-8").split()
        assert labels == ["1", "2"]

    def test_progress_callback(self, corpus, tmp_path):
        calls = []
        exporter = SLDAExporter(SLDAExportConfig(output_dir=str(tmp_path)), log_function=Mock())

        exporter.export(corpus, progress_cb=lambda d, t, p: calls.append((d, t, p)))

        assert calls[0] == (0, 3, "export")
        assert calls[-1] == (3, 3, "export")

    def test_failing_progress_callback_is_ignored(self, corpus, tmp_path):
        exporter = SLDAExporter(SLDAExportConfig(output_dir=str(tmp_path)), log_function=Mock())

        def boom(done, total, phase):
            raise RuntimeError("ui closed")

        summary = exporter.export(corpus, progress_cb=boom)
        assert summary.documents == 3

    def test_custom_label_mapping(self, corpus, tmp_path):
        class Upper:
            def get_or_assign(self, label):
                return {"SPORTS": 10, "POLITICS": 20}[label.upper()]

            def get_label(self, value):
                return {10: "sports", 20: "politics"}[value]

        exporter = SLDAExporter(SLDAExportConfig(output_dir=str(tmp_path)),
                                label_mapping=Upper(), log_function=Mock())
        summary = exporter.export(corpus)

        assert summary.labels == {"sports": 10, "politics": 20}

    def test_empty_export(self, tmp_path):
        exporter = SLDAExporter(SLDAExportConfig(output_dir=str(tmp_path)), log_function=Mock())
        summary = exporter.export([])

        assert summary.documents == 0
        assert (tmp_path / "slda-data.dat").read_text(encoding="utf-8") == ""
