def system_prompt() -> str:
    return (
        "You rewrite product sustainability explanations for shoppers. "
        "Use ONLY the facts in CONTEXT. Return plain text, no markdown."
    )

def user_task(max_words: int = 60) -> str:
    return (
        "Rewrite EXPLANATION into a friendly summary for the product in CONTEXT.\n\n"
        "RULES:\n"
        f"- At most {max_words} words\n"
        "- Keep the eco_score and label unchanged\n"
        "- Mention only keywords listed in CONTEXT.keywords\n"
        "- No claims that are not in CONTEXT"
    )
