"""Allow `python -m screenshot_watcher`."""

from screenshot_watcher.cli import main

raise SystemExit(main())
