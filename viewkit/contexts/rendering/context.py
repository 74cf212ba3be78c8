"""Per-chain render state (blocks, pending layout, active capture)."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

# Name of the block that receives a view's output when it requests a layout
CONTENT_BLOCK = "content"


@dataclass
class RenderContext:
    """
    Mutable state shared by one render chain.

    A render chain is an outermost ``Renderer.render`` call together with its layout
    passes and any partials rendered along the way.

    Attributes:
        layout: Layout requested by the view currently executing (None if none)
        block_name: Block currently being captured (None if no capture is active)
        block_level: Buffer level at which the active capture frame was opened
        blocks: Captured block contents; values are text or a boolean sentinel
    """

    layout: Optional[str] = None
    block_name: Optional[str] = None
    block_level: Optional[int] = None
    blocks: Dict[str, Union[str, bool]] = field(default_factory=dict)

    @property
    def capturing(self) -> bool:
        return self.block_name is not None

    def clear_capture(self) -> None:
        self.block_name = None
        self.block_level = None
