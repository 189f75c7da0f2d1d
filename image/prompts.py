"""Prompt templates sent to Stability for each generation mode."""
from image.models import GenerationMode

EDIT_PROMPT_TEMPLATE = """
You are editing the provided product photo.

Apply ONLY these changes: {instruction}

Keep the same product, shape, camera angle and proportions.
Do NOT change the object identity.
Do NOT add extra objects, people, text, or logos.
Just adjust background, colors and lighting to match the request.
""".strip()

GENERATE_PROMPT_TEMPLATE = """
Generate a clean, high-quality, realistic e-commerce product photo.

Follow this instruction: {instruction}

The result should be sharp, well lit, and professional, suitable for product listings or ads.
""".strip()

PROMPT_TEMPLATES = {
    GenerationMode.EDIT: EDIT_PROMPT_TEMPLATE,
    GenerationMode.GENERATE: GENERATE_PROMPT_TEMPLATE,
}


def compose_prompt(instruction: str, mode: GenerationMode) -> str:
    """Substitute the instruction into the fixed template for `mode`."""
    return PROMPT_TEMPLATES[mode].format(instruction=instruction)
