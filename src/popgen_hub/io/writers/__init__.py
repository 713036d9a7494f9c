"""Writers for analysis results."""

from popgen_hub.io.writers.report_writer import OUTPUT_FORMATS, OutputOptions, ResultWriter

__all__ = ["OUTPUT_FORMATS", "OutputOptions", "ResultWriter"]
