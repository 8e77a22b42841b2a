"""
Main entry point for running MailboxChess as a UCI engine.

Usage:
    python -m mailbox_chess.uci
"""

from mailbox_chess.uci.interface import UCIEngine


def main():
    engine = UCIEngine()
    engine.run()


if __name__ == "__main__":
    main()
