"""Per-file structural metrics."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass
class StructuralMetrics:
    """Counts and complexity derived from one file's syntax.

    All counts are non-negative; complexity starts at 0 and only grows
    while a strategy runs. ``dependencies`` holds import strings exactly as
    written, before resolution.
    """

    import_count: int = 0
    export_count: int = 0
    function_count: int = 0
    class_count: int = 0
    interface_count: int = 0
    type_count: int = 0
    public_methods: int = 0
    complexity: float = 0.0
    dependencies: list[str] = field(default_factory=list)
    exports: list[str] = field(default_factory=list)
    frameworks: list[str] = field(default_factory=list)
    is_entry_point: bool = False
    is_test_file: bool = False
    is_config_file: bool = False
    strategy: str = ""

    def fresh(self) -> StructuralMetrics:
        """Empty metrics that keep only the detected file characteristics."""
        return StructuralMetrics(
            frameworks=list(self.frameworks),
            is_entry_point=self.is_entry_point,
            is_test_file=self.is_test_file,
            is_config_file=self.is_config_file,
        )

    @property
    def is_generated(self) -> bool:
        """No functions, classes, exports or complexity at all."""
        return (
            self.function_count == 0
            and self.class_count == 0
            and self.export_count == 0
            and self.complexity == 0
        )

    def to_dict(self) -> dict:
        return asdict(self)
