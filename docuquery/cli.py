# ============================================================
# docuquery-chat
# ------------------------------------------------------------
# Terminal stand-in for the browser UI:
#   1) Extracts text from FILE into a fresh session
#   2) Reads questions from stdin until EOF / quit / exit
#   3) Prints each answer returned through /api/generate
# ============================================================

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from docuquery.client import QueryClient, ExtractionFailed, render
from docuquery.settings import settings

QUIT_WORDS = {"quit", "exit"}


def chat_loop(client: QueryClient, stdin: TextIO, stdout: TextIO) -> None:
    for line in stdin:
        question = line.strip()
        if question.lower() in QUIT_WORDS:
            break
        text = render(client.ask(question))
        if text:
            print(text, file=stdout)
            stdout.flush()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Ask questions about a PDF, DOCX or TXT document.")
    parser.add_argument("file", help="Document to load.")
    parser.add_argument("--proxy-url", default=settings.PROXY_URL, help="POST endpoint of the DocuQuery proxy.")
    parser.add_argument("--model", default=None, help="Override the model name.")
    parser.add_argument("--max-retries", type=int, default=5, help="Attempts per question on 429/5xx.")
    parser.add_argument("--no-retry", dest="retry", action="store_false", help="Single attempt per question.")
    args = parser.parse_args(argv)

    client = QueryClient(
        proxy_url=args.proxy_url,
        model=args.model,
        use_retry=args.retry,
        max_retries=args.max_retries,
    )
    if not client.accepts(args.file):
        print(client.session.status.text, file=sys.stderr)
        return 1

    result = client.load_path(args.file)
    print(client.session.status.text, file=sys.stderr if isinstance(result, ExtractionFailed) else sys.stdout)
    if isinstance(result, ExtractionFailed):
        return 1

    chat_loop(client, sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
