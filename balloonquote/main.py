"""Entry point for the balloon-quote Textual app."""

from __future__ import annotations

from balloonquote.quote_app import QuoteApp


def main() -> None:
    QuoteApp().run()


if __name__ == "__main__":
    main()
