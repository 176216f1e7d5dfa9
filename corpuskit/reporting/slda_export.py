# corpuskit/reporting/slda_export.py
"""
SLDA Export

Writes documents in the line formats read by supervised LDA tools:
- a term data file, one "<n> term:weight ..." line per document
- a label file, one integer class label per document
- a JSON table mapping each label string to its integer
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from corpuskit.core.document import Document
from corpuskit.utils.invertible_map import LabelIndex, LabelMapping

logger = logging.getLogger(__name__)

ProgressCB = Optional[Callable[[int, int, str], None]]


@dataclass
class SLDAExportConfig:
    """
    Output locations for an slda export.
    """
    output_dir: str = "slda"
    term_file: str = "slda-data.dat"
    label_file: str = "slda-labels.dat"
    mapping_file: str = "slda-label-mapping.json"
    encoding: str = "utf-8"


@dataclass
class SLDAExportSummary:
    """
    What an export wrote.
    """
    documents: int = 0
    labels: Dict[str, int] = field(default_factory=dict)
    term_path: Optional[str] = None
    label_path: Optional[str] = None
    mapping_path: Optional[str] = None


class SLDAExporter:
    """
    Serializes documents to slda term/label files.

    The label mapping is shared by every call on this exporter, so exports
    made in sequence agree on label integers.
    """

    def __init__(self, config: Optional[SLDAExportConfig] = None,
                 label_mapping: Optional[LabelMapping] = None, log_function=None):
        """
        Args:
            config: Output locations (defaults to SLDAExportConfig())
            label_mapping: Label encoder (defaults to a fresh LabelIndex)
            log_function: Optional logging function (default: module logger)
        """
        self.config = config or SLDAExportConfig()
        self.label_mapping = label_mapping if label_mapping is not None else LabelIndex()
        self.log = log_function or logger.info

    def term_lines(self, docs: Iterable[Document]) -> List[str]:
        return [d.get_slda_term_data() for d in docs]

    def label_lines(self, docs: Iterable[Document]) -> List[str]:
        return [d.get_slda_label_data(self.label_mapping) for d in docs]

    def export(self, docs: Iterable[Document], progress_cb: ProgressCB = None) -> SLDAExportSummary:
        """
        Write term, label and mapping files for docs, in input order.

        Args:
            docs: Documents to export
            progress_cb: Optional (done, total, phase) callback

        Returns:
            SLDAExportSummary describing the written files
        """
        def report(phase: str, done: int, total: int):
            if progress_cb:
                try:
                    progress_cb(done, total, phase)
                except Exception:
                    logger.debug("progress callback failed", exc_info=True)

        cfg = self.config
        docs_list = list(docs)
        total = len(docs_list)
        out_dir = Path(cfg.output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        term_path = out_dir / cfg.term_file
        label_path = out_dir / cfg.label_file
        mapping_path = out_dir / cfg.mapping_file

        report("export", 0, total)
        with open(term_path, "w", encoding=cfg.encoding) as tf, \
                open(label_path, "w", encoding=cfg.encoding) as lf:
            for i, doc in enumerate(docs_list, start=1):
                tf.write(doc.get_slda_term_data() + "\n")
                lf.write(doc.get_slda_label_data(self.label_mapping) + "\n")
                if (i % 100) == 0 or i == total:
                    report("export", i, total)

        labels = self._label_table(docs_list)
        with open(mapping_path, "w", encoding=cfg.encoding) as mf:
            json.dump(labels, mf, indent=2, ensure_ascii=False)

        self.log(f"Exported {total} documents ({len(labels)} labels) to {out_dir}")
        return SLDAExportSummary(
            documents=total,
            labels=labels,
            term_path=str(term_path),
            label_path=str(label_path),
            mapping_path=str(mapping_path),
        )

    def _label_table(self, docs: List[Document]) -> Dict[str, int]:
        if isinstance(self.label_mapping, LabelIndex):
            return self.label_mapping.to_dict()
        # any other LabelMapping: only the labels seen in this export
        return {d.label: self.label_mapping.get_or_assign(d.label) for d in docs}


def load_label_mapping(path: str, encoding: str = "utf-8") -> LabelIndex:
    """
    Load a label table written by SLDAExporter.export.
    """
    with open(path, "r", encoding=encoding) as f:
        return LabelIndex.from_dict(json.load(f))
