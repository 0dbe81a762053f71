"""
Box ident generation.

Every command added to a queue gets a deterministic identifier so a
later partial update can recognize "the same" element across
regenerations of a publication.

Format:
    <prefix><page number>_<reference>

Commands the queue creates itself (cursor variables, page messages)
always get the queue prefix and their sequence number.

For commands submitted by callers, the reference is resolved in order:
    1. The command's own box ident reference   -> content prefix
    2. The builder's reference + generic postfix -> content prefix
    3. The queue-relative sequence number        -> queue prefix

Identical (prefix, page, reference) give identical idents. That
collision is intended: it is how content is re-identified.
"""

from dtpcmd.command import AbstractCommand

SEPARATOR = "_"

ROLE_QUEUE = "queue"
ROLE_CONTENT = "content"


class BoxIdentBuilder:
    """
    Holds the content reference of a run.

    Callers set the reference from the CMS content they are about to
    place (typically an object id), and an optional generic postfix to
    tell identical siblings on one page apart.
    """

    def __init__(self, queue_prefix: str = "Q", content_prefix: str = "C"):
        self.queue_prefix = queue_prefix
        self.content_prefix = content_prefix
        self.reference = ""
        self.generic_postfix = ""

    def set_reference(self, reference: str) -> None:
        self.reference = str(reference)

    def append_to_reference(self, reference: str) -> None:
        self.set_reference(self.reference + str(reference))

    def set_generic_postfix(self, postfix: str) -> None:
        self.generic_postfix = str(postfix)

    def reset(self) -> None:
        self.reference = ""
        self.generic_postfix = ""

    def build(self, prefix: str, page_number: int, reference: str) -> str:
        return f"{prefix}{page_number}{SEPARATOR}{reference}"

    def create(self, command: AbstractCommand, page_number: int, sequence: int,
               role: str = ROLE_CONTENT) -> str:
        """Return the box ident for `command` placed on `page_number` by `role`."""
        if role == ROLE_QUEUE:
            return self.build(self.queue_prefix, page_number, str(sequence))
        if command.box_ident_reference:
            return self.build(self.content_prefix, page_number, command.box_ident_reference)
        if self.reference:
            return self.build(self.content_prefix, page_number, self.reference + self.generic_postfix)
        return self.build(self.queue_prefix, page_number, str(sequence))
