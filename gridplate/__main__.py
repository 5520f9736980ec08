# gridplate/__main__.py
# Package entrypoint so you can run:
#   python -m gridplate --help
# and it will delegate to the project planner CLI.
#
# Examples:
#   python -m gridplate --project project.json
#   python -m gridplate --project project.json --queue queue.json --save

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    main()
