"""File length condition: runs if a file's length matches a given criteria."""

from typing import List, Optional, Tuple, Union

from runconditions.conditions.base import BaseDirectory, BuildContext, RunCondition
from runconditions.primitives import length_comparator
from runconditions.primitives.errors import ValidationError
from runconditions.primitives.length_comparator import When
from runconditions.runtime.file_stat import stat_file


class FileLengthCondition(RunCondition):
    """Compare the length of a file under a base directory to a target length.

    Attributes:
        file: Path relative to the base directory; macros are expanded.
        length: Target length as configured.
        when: Comparison operator symbol (eq, ne, gt, ge, lt, le).
        base_dir: Directory the file path is resolved against.
    """

    kind = "file-length"
    display_name = "File length"

    def __init__(
        self,
        file: str,
        length: str,
        when: str,
        base_dir: Union[BaseDirectory, str] = BaseDirectory.WORKSPACE,
    ):
        self.file = file
        self.length = length
        self.when = when
        self.base_dir = base_dir if isinstance(base_dir, BaseDirectory) else BaseDirectory(base_dir)

    def run_perform(self, context: BuildContext) -> bool:
        expanded_file = context.expand(self.file)
        context.logger.info(
            "File length condition: base directory = %s, file = %s, length = %s, when = %s",
            self.base_dir,
            self.file,
            self.length,
            self.when,
        )
        stat = stat_file(self.base_dir.resolve(context), expanded_file)
        return length_comparator.evaluate(
            stat.length if stat.exists else None,
            self.length,
            self.when,
            log=context.logger,
        )

    # Configuration-time validation

    @staticmethod
    def check_file(value: Optional[str]) -> Optional[ValidationError]:
        if not value or not value.strip():
            return ValidationError(field="file", error="File is required", value=value)
        return None

    @staticmethod
    def check_length(value: Optional[str]) -> Optional[ValidationError]:
        return length_comparator.check_length(value)

    @staticmethod
    def check_when(value: Optional[str]) -> Optional[ValidationError]:
        if value not in {w.symbol for w in When}:
            return ValidationError(
                field="when", error="Unknown comparison operator", value=value
            )
        return None

    @staticmethod
    def when_options() -> List[Tuple[str, str]]:
        return When.options()

    @staticmethod
    def base_directory_options() -> List[Tuple[str, str]]:
        return BaseDirectory.options()

    def validate(self) -> List[ValidationError]:
        errors = [
            self.check_file(self.file),
            self.check_length(self.length),
            self.check_when(self.when),
        ]
        return [e for e in errors if e is not None]

    def __repr__(self) -> str:
        return (
            f"FileLengthCondition(file={self.file!r}, length={self.length!r}, "
            f"when={self.when!r}, base_dir={self.base_dir!r})"
        )
