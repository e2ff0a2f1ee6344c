"""
This module provides functionality for rendering prompts using Jinja2 templates.
It sets up a Jinja2 environment and offers a function to render templates with given context.
"""

import logging
from pathlib import Path
from typing import Optional
from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

logger = logging.getLogger(__name__)

PROMPTS_PATH = Path(__file__).resolve().parent / 'prompts'

# Set up Jinja2 environment
env = Environment(loader=FileSystemLoader(PROMPTS_PATH), undefined=StrictUndefined)

def render_prompt(template_name: str, context: dict = None) -> Optional[str]:
    """
    Render a prompt template with the given context.

    Args:
        template_name (str): The name of the template file to render (e.g. 'prompt_name.j2')
        context (dict, optional): A dictionary of variables to pass to the template. Defaults to None.

    Returns:
        str: The rendered template as a string or None.
    """
    try:
        template = env.get_template(template_name)
        return template.render(context or {})

    except TemplateError as e:
        logger.error(f"render_prompt: Issue rendering template: '{template_name}' - {e}")
        return None
