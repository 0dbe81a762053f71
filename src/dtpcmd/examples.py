"""
Example publication builder.

Builds a small product catalog through the public API only:
    - Header box on page 1
    - One row per product: title text box and image box, stacked
      below the published yPos variable
    - Page break when a row would pass the bottom margin
    - Products without a resolvable image are counted as missing assets
"""
from typing import Any, Dict, List, Optional

from dtpcmd.commands import CheckNewPage, GoToPage, ImageBox, TextBox, Variable
from dtpcmd.config import QueueConfig
from dtpcmd.rendering import GENERATED_AT_VARIABLE, RenderingContext

PAGE_TOP = 20.0
PAGE_BOTTOM = 270.0
ROW_HEIGHT = 45.0
LEFT_MARGIN = 15.0
IMAGE_LEFT = 120.0


def example_products() -> List[Dict[str, Any]]:
    return [
        {"id": 101, "title": "Desk lamp", "asset_id": 9001, "src": "lamp.jpg"},
        {"id": 102, "title": "Office chair", "asset_id": 9002, "src": "chair.jpg"},
        {"id": 103, "title": "Bookshelf", "asset_id": 9003, "src": ""},
        {"id": 104, "title": "Side table", "asset_id": 9001, "src": "lamp.jpg"},
        {"id": 105, "title": "Floor rug", "asset_id": 9005, "src": "rug.jpg"},
        {"id": 106, "title": "Wall clock", "asset_id": 9006, "src": "clock.jpg"},
    ]


def _place_product(context: RenderingContext, product: Dict[str, Any]) -> None:
    queue = context.queue
    y_var = context.config.y_position_variable

    context.set_box_ident_reference(str(product["id"]))

    context.set_box_ident_generic_postfix("title")
    title = TextBox("productTitle", LEFT_MARGIN, width=100, height=10, content=product["title"])
    title.set_top_relative(y_var, 0)
    title.add_component(Variable("titleBottom", "bottom"))
    context.add_command(title)

    if product["src"]:
        context.set_box_ident_generic_postfix("image")
        image = ImageBox("productImage", IMAGE_LEFT, width=60, height=40,
                         asset_id=product["asset_id"], src=product["src"])
        image.set_top_relative(y_var, 0)
        image.add_component(CheckNewPage(PAGE_BOTTOM, PAGE_TOP))
        context.add_command(image)
    else:
        queue.increment_missing_asset_counter(product["asset_id"])

    context.set_box_ident_generic_postfix("")


def build_example_catalog(context: RenderingContext, products: Optional[List[Dict[str, Any]]] = None,
                          generated_at: Optional[int] = None) -> None:
    """Build the catalog publication into `context`."""
    if products is None:
        products = example_products()
    queue = context.queue

    context.start_rendering(generated_at=generated_at)

    header = TextBox("header", LEFT_MARGIN, PAGE_TOP - 12, width=180, height=12, content="Product catalog")
    context.add_command(header)
    context.add_command(TextBox("generatedAt", LEFT_MARGIN, PAGE_BOTTOM + 10, width=60, height=5,
                                content=f"[{GENERATED_AT_VARIABLE}]"))
    queue.set_y_pos(PAGE_TOP, emit=True)

    for product in products:
        if queue.get_y_pos() + ROW_HEIGHT > PAGE_BOTTOM:
            page = queue.increment_page_number()
            context.add_command(GoToPage(page))
            queue.set_y_pos(PAGE_TOP, emit=True)
        _place_product(context, product)
        context.set_box_ident_reference("")
        queue.increment_y_pos(ROW_HEIGHT, emit=True)

    context.stop_rendering()


def run_example_catalog(config: Optional[QueueConfig] = None, generated_at: int = 0) -> RenderingContext:
    context = RenderingContext(config, template="catalog_template.indd", language="en")
    context.run(lambda ctx: build_example_catalog(ctx, generated_at=generated_at))
    return context
