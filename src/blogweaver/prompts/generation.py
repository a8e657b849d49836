from __future__ import annotations

TITLES_SYSTEM_PROMPT = (
    "You are an assistant that proposes blog post titles. Based on the given theme, "
    "suggest catchy, attention-grabbing titles."
)

OUTLINE_SYSTEM_PROMPT = (
    "You are an assistant that proposes blog post outlines. Based on the given theme and "
    "title, propose an outline that suits a blog article."
)

CONTENT_SYSTEM_PROMPT = (
    "You are a professional blogger. Based on the given theme, title, and outline, write an "
    "easy-to-read, informative blog article."
)


def titles_user_prompt(theme: str, count: int) -> str:
    return (
        f'Propose {count} title candidates for a blog article about the theme "{theme}". '
        "Make them SEO-friendly and likely to get clicks. "
        "Output the titles as a bulleted list with one title per line."
    )


def outline_user_prompt(theme: str, title: str) -> str:
    return (
        f'Create an outline for a blog article with the theme "{theme}" and the title "{title}".\n'
        "The outline must satisfy the following:\n"
        "- About 4 to 6 top-level headings (level 1)\n"
        "- Sub-headings (level 2) under a heading where useful\n"
        "- Every heading is concrete and interesting to readers\n"
        "- Output the outline as JSON\n"
        "\n"
        "Use exactly this structure:\n"
        "[\n"
        '  { "id": "1", "title": "Heading text", "level": 1 },\n'
        '  { "id": "2", "title": "Another heading", "level": 1 },\n'
        '  { "id": "3", "title": "Sub-heading text", "level": 2 }\n'
        "]\n"
        "\n"
        "Output ONLY the JSON, without explanations or markdown code fences."
    )


def content_user_prompt(theme: str, title: str, outline_text: str) -> str:
    return (
        f'Write a blog article with the theme "{theme}" and the title "{title}".\n'
        "\n"
        "Flesh out each section following this outline:\n"
        "\n"
        f"# {title}\n"
        "\n"
        f"{outline_text}\n"
        "\n"
        "Requirements:\n"
        "- Write in Markdown\n"
        "- Write roughly 200 to 300 words for each heading\n"
        "- Include concrete advice and examples readers can act on\n"
        "- Explain technical terms so beginners can follow\n"
        "- Keep a natural, readable tone\n"
        "- End each section with a bridge into the next one\n"
        "- Important: do not use fenced code blocks; use indentation or bullet lists instead\n"
        "- If code is needed, use inline code wrapped in single backticks\n"
        "- Prefer prose over commands and code samples"
    )
