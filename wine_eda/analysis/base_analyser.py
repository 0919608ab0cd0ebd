"""Base analyzer class for all analysis components."""

from abc import ABC, abstractmethod
from typing import Any


class BaseAnalyser(ABC):
    """Abstract base class for the analysis stages of the report.

    All analyzers must:
    1. Accept a DatasetView in their constructor
    2. Implement fit() to perform the analysis and return self for chaining
    3. Implement result() to return a frozen dataclass with results

    Analyzers never mutate the view they are given: the loaded wine table is
    shared read-only by every stage of a report run.

    ---

    ### Adding a New Analyzer

    **1. Create analyzer class** (in `analysis/my_analyzer.py`):

    ```python
    @dataclass(frozen=True)
    class MyAnalysisResult:
        '''Results package for MyAnalyzer.'''
        summary: pd.DataFrame

    class MyAnalyzer(BaseAnalyser):
        def __init__(self, view: DatasetView):
            self._view = view
            self._summary: pd.DataFrame | None = None

        def fit(self) -> "MyAnalyzer":
            self._summary = self._view.features.agg(["mean", "median"])
            return self

        def result(self) -> MyAnalysisResult:
            if self._summary is None:
                raise ValueError("Call fit() first")
            return MyAnalysisResult(summary=self._summary)
    ```

    **2. Add a factory method** to `BaseDataset` building the view
    (`self.analyzer_view(...)` for numeric analyses, `self.plot_view(...)` when
    the categorical quality score is needed).

    **3. Plot from the result** in `plotting/`: accept the `*Result` dataclass,
    return a matplotlib `Figure` and forward `**kwargs` to the seaborn call.
    """

    @abstractmethod
    def fit(self) -> "BaseAnalyser":
        """Fit the analyzer to the data.

        Returns:
            Self for method chaining.
        """
        ...

    @abstractmethod
    def result(self) -> Any:
        """Return analysis results as a frozen dataclass instance.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        ...
