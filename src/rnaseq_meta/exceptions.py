"""Error types raised by the meta-analysis pipeline."""


class MetaAnalysisError(Exception):
    """Base class for pipeline errors."""


class StudySchemaError(MetaAnalysisError):
    """A study table lacks required columns; the study is skipped."""

    def __init__(self, source, missing):
        self.source = source
        self.missing = list(missing)
        super().__init__(
            f"{source} does not contain the required columns "
            f"({', '.join(self.missing)}) and will be skipped."
        )


class NoValidStudiesError(MetaAnalysisError):
    """No study survived validation."""


class EmptyGeneSetError(MetaAnalysisError):
    """No gene is shared by every study."""


class MatrixDimensionError(MetaAnalysisError):
    """An aligned study column does not match the common gene set."""
