import html
import logging
import re
from langchain_groq import ChatGroq
from langchain_core.prompts import PromptTemplate
from langchain_core.output_parsers import StrOutputParser
from mailpolish.config import GROQ_API_KEY, GROQ_MODEL_NAME, POLISH_TEMPERATURE, POLISH_MAX_TOKENS

_logger = logging.getLogger(__name__)

POLISH_PROMPT = PromptTemplate.from_template("""
    You are an AI assistant helping a user polish an email they have written.

    Desired tone: {tone}
    Language: {language}
    Use-case: {context}
    Subject: {subject}

    === ORIGINAL DRAFT ===
    {body}

    INSTRUCTIONS:
    - Rewrite the draft so it reads clearly and naturally in the desired tone
    - Write the result in the requested language
    - Keep every fact, date, name and request from the original
    - Do NOT make up information; use placeholders like [INSERT INFO HERE] where necessary
    - Keep greetings and sign-offs if the original has them

    Response formatting:
    - Return ONLY the polished email body as plain text
    - No preamble, no explanations, no subject line

    Polished email:
    """)


def get_llm():
    return ChatGroq(model=GROQ_MODEL_NAME,
                    temperature=POLISH_TEMPERATURE,
                    max_tokens=POLISH_MAX_TOKENS,
                    api_key=GROQ_API_KEY)


def polish_text(body: str, tone: str = None, language: str = None,
                context: str = None, subject: str = None) -> str:
    """Rewrite a draft body with the LLM and return the polished text"""
    _logger.debug(f"Polishing draft with tone: {tone} and language: {language}")

    chain = POLISH_PROMPT | get_llm() | StrOutputParser()
    response = chain.invoke({
        "body": clean_html_for_llm(body),
        "tone": tone or "Professional",
        "language": language or "same as the original",
        "context": context or "not specified",
        "subject": subject or "not specified",
    })
    return clean_llm_output(response)


def clean_html_for_llm(html_content: str) -> str:
    """Convert HTML content to clean text for LLM processing"""
    if not html_content or not isinstance(html_content, str):
        return html_content

    text = re.sub(r'<script[^>]*>.*?</script>', '', html_content, flags=re.DOTALL | re.IGNORECASE)
    text = re.sub(r'<style[^>]*>.*?</style>', '', text, flags=re.DOTALL | re.IGNORECASE)
    text = re.sub(r'<br\s*/?>|</p>', '\n', text, flags=re.IGNORECASE)
    text = re.sub(r'<[^>]+>', ' ', text)

    text = html.unescape(text)

    # Collapse runs of spaces but keep paragraph breaks
    text = re.sub(r'[ \t]+', ' ', text)
    text = re.sub(r' *\n *', '\n', text)
    text = re.sub(r'\n{3,}', '\n\n', text)
    return text.strip()


def clean_llm_output(text: str) -> str:
    """Strip code fences and stray labels the model sometimes adds"""
    if not text:
        return ""
    text = text.strip()
    text = re.sub(r'^```[a-zA-Z]*\n?|\n?```$', '', text).strip()
    text = re.sub(r'^(polished email|polished draft)\s*:\s*', '', text, flags=re.IGNORECASE)
    return text.strip()
