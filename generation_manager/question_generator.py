"""
Question generation and OCR functions using the Gemini API handler.

Each function renders a prompt from a Jinja2 template, sends it (with an
inline image where needed) through the API handler, and turns the free-form
reply into text or parsed JSON.

All functions raise ValueError when no API key is configured, before any
request is made, and RuntimeError when the request or the reply fails.
"""

import base64
import logging
from typing import Dict, List

from prompt_manager.prompt_builder import render_prompt
from prompt_manager.json_processor import extract_json
from prompt_manager.schema.question_schema import questions_json_example, question_paper_json_example
from utils.api_request import prompt_gemini_single
from utils.settings_manager import get_setting

logger = logging.getLogger(__name__)

OCR_CONFIDENCE = get_setting('GEMINI_API', 'ocr_confidence')

def _render(template_name: str, context: dict = None) -> str:
    prompt = render_prompt(template_name, context)
    if prompt is None:
        raise RuntimeError(f"Failed to render prompt '{template_name}'")
    return prompt

def _image_part(image_bytes: bytes, mime_type: str) -> Dict:
    return {
        'inline_data': {
            'mime_type': mime_type,
            'data': base64.b64encode(image_bytes).decode('ascii')
        }
    }

def _request_text(parts: List[Dict], task: str) -> str:
    """ Send the parts and return the reply text, raising RuntimeError on failure. """
    result = prompt_gemini_single(parts)
    if not result['success']:
        raise RuntimeError(f"Failed to {task} with Gemini API")
    return result['text']

def generate_mcq_questions(subject: str, topic: str, difficulty: str = 'medium', count: int = 5) -> List[Dict]:
    """
    Generate multiple choice questions for a subject and topic.

    Args:
        subject (str): The subject, e.g. 'Physics'.
        topic (str): The topic within the subject.
        difficulty (str, optional): 'easy', 'medium' or 'hard'. Defaults to 'medium'.
        count (int, optional): Number of questions to ask for. Defaults to 5.

    Returns:
        List[Dict]: Parsed questions as returned by the model. The count and
            shape are not checked here.
    """
    prompt = _render('mcq_generation.j2', {
        'subject': subject,
        'topic': topic,
        'difficulty': difficulty,
        'count': count,
        'json_example': questions_json_example.strip()
    })
    text = _request_text([{'text': prompt}], 'generate questions')

    questions = extract_json(text, '[', ']')
    if questions is None:
        logger.error("generate_mcq_questions: No JSON array found in reply")
        raise RuntimeError("Failed to parse JSON response from Gemini")

    logger.info(f"generate_mcq_questions: Parsed {len(questions)} questions for '{subject} / {topic}'")
    return questions

def analyze_question_paper(image_bytes: bytes, mime_type: str) -> Dict:
    """
    Extract title, subject, total marks and questions from a question paper image.

    Returns:
        Dict: The parsed JSON object from the reply.
    """
    prompt = _render('question_paper_analysis.j2', {'json_example': question_paper_json_example.strip()})
    text = _request_text([{'text': prompt}, _image_part(image_bytes, mime_type)], 'analyze question paper')

    paper = extract_json(text, '{', '}')
    if paper is None:
        logger.error("analyze_question_paper: No JSON object found in reply")
        raise RuntimeError("Failed to parse JSON response from Gemini")
    return paper

def extract_text_from_image(image_bytes: bytes, mime_type: str) -> Dict:
    """
    Extract all text content from an image.

    Returns:
        Dict: {'text': str, 'confidence': float}. The model reports no
            confidence, so the configured estimate is returned.
    """
    prompt = _render('image_text_extraction.j2')
    text = _request_text([{'text': prompt}, _image_part(image_bytes, mime_type)], 'extract text from image')
    return {'text': text, 'confidence': OCR_CONFIDENCE}

def convert_handwritten_notes(image_bytes: bytes, mime_type: str) -> str:
    """ Transcribe handwritten notes in an image to structured plain text. """
    prompt = _render('handwritten_notes.j2')
    return _request_text([{'text': prompt}, _image_part(image_bytes, mime_type)], 'convert handwritten notes')
