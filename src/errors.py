"""Exception hierarchy for pagebound."""


class PageboundError(Exception):
    """Base error for pagebound operations."""


class PromptOutOfRangeError(PageboundError, ValueError):
    """A prompt index falls outside a guided program."""

    def __init__(self, program_id: str, prompt_index: int, length: int) -> None:
        self.program_id = program_id
        self.prompt_index = prompt_index
        self.length = length
        super().__init__(
            f"Prompt {prompt_index} is out of range for program {program_id!r} "
            f"({length} prompts)"
        )


class TagDeletionNotSupportedError(PageboundError, NotImplementedError):
    """Tag deletion has no cascade policy yet, so nothing is removed."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(
            f"Deleting tag {tag!r} is not supported: entries keep their tags"
        )
