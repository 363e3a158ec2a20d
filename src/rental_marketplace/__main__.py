"""Module entry point for python -m rental_marketplace."""

from __future__ import annotations

from rental_marketplace.app import main


if __name__ == "__main__":
    raise SystemExit(main())
