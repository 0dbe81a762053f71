"""
Run configuration.

One QueueConfig is created per rendering run and passed explicitly to
the queue and the rendering context. There is no global configuration.

Load from YAML with dtpcmd.serialization.load_config().
"""

from dataclasses import dataclass

from dtpcmd.commands.variable import Variable


@dataclass
class QueueConfig:
    """
    Properties:
        y_position_variable:
            Reserved variable name publishing the vertical cursor

        queue_ident_prefix:
            Box ident prefix for commands without a content reference

        content_ident_prefix:
            Box ident prefix for commands tied to CMS content

        asset_download_enabled:
            Include registered assets in responses

        debug:
            Add tracebacks to error responses
    """

    y_position_variable: str = Variable.VARIABLE_Y_POSITION
    queue_ident_prefix: str = "Q"
    content_ident_prefix: str = "C"
    asset_download_enabled: bool = True
    debug: bool = False

    def __post_init__(self) -> None:
        if not self.y_position_variable:
            raise ValueError("y_position_variable must be non-empty")
        if not self.queue_ident_prefix or not self.content_ident_prefix:
            raise ValueError("box ident prefixes must be non-empty")
        if self.queue_ident_prefix == self.content_ident_prefix:
            raise ValueError("queue and content box ident prefixes must differ")
