from .slda_export import SLDAExportConfig, SLDAExportSummary, SLDAExporter, load_label_mapping

__all__ = ["SLDAExportConfig", "SLDAExportSummary", "SLDAExporter", "load_label_mapping"]
