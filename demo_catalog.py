"""
Demo: Generate the example catalog and print the response report.
"""

import logging

from dtpcmd.examples import run_example_catalog
from dtpcmd.response import build_success_response
from dtpcmd.serialization import commands_to_yaml, response_to_json


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    context = run_example_catalog(generated_at=1700000000)
    response = build_success_response(context)

    print(f"Commands:        {len(response['commands'])}")
    print(f"Pages:           {context.queue.get_page_number()}")
    print(f"Images:          {sorted(response['images'])}")
    print(f"Missing assets:  {context.queue.get_missing_assets()}")
    for message in response["messages"]:
        print(f"  ! {message}")

    with open("example_catalog_commands.yaml", "w") as f:
        f.write(commands_to_yaml(response["commands"]))
    with open("example_catalog_response.json", "w") as f:
        f.write(response_to_json(response))
    print("✅ Commands exported to example_catalog_commands.yaml")
