class PromptStrings:
    FACT_CHECK_SYSTEM = (
        "You are a fact-checking expert. Analyze the provided news content and determine "
        "if it's likely to be true or false. Provide a clear explanation for your assessment."
    )

    FACT_CHECK_HEADER = "Please fact-check the following news content:\n\nContent: {content}\n"

    FACT_CHECK_SOURCE_LINK = "Source Link: {link}\n"

    FACT_CHECK_PHOTO_URL = "Photo URL: {photo_url}\n"

    FACT_CHECK_INSTRUCTIONS = """
Please respond with:
1. A clear assessment: 'TRUE', 'FALSE', or 'UNCERTAIN'
2. A detailed explanation for your assessment
3. Any relevant context or sources you considered"""

    MODEL_NOT_CONFIGURED = (
        "OpenAI API not configured. Please configure your OpenAI API key to enable fact-checking."
    )
