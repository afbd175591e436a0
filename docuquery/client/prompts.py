# Prompt fragments for grounded document Q&A.

NOT_FOUND_PHRASE = "I cannot find that information in the document."

BASE_GUARDRAILS = f"""\
You are an expert Q&A system. Your sole source of information is the document provided. \
You MUST only answer the user's question using the text found in the document provided \
within the triple backticks. Do not use any external knowledge.

If the answer is not available in the provided text, you MUST respond with the exact phrase: \
"{NOT_FOUND_PHRASE}"
"""


def build_grounding_prompt(document_text: str) -> str:
    return f"""{BASE_GUARDRAILS}
DOCUMENT:
```
{document_text}
```"""
