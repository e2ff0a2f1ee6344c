"""
This module provides functions for making API requests to Gemini.
It includes utilities for sending requests and handling responses.
"""

import asyncio
import aiohttp
import os
import logging
from typing import List, Dict, Optional

from utils.settings_manager import get_setting

logger = logging.getLogger(__name__)

# Load Gemini API settings
GEMINI_BASE_URL = get_setting('GEMINI_API', 'base_url')
GEMINI_MODEL = get_setting('GEMINI_API', 'model')
GEMINI_MAX_CLIENT_TIMEOUT_SEC = get_setting('GEMINI_API', 'max_client_timeout_sec')

def get_api_key() -> str:
    """
    Read the Gemini API key from the environment.

    Raises:
        ValueError: If the key is not configured.
    """
    api_key = os.getenv('GEMINI_API_KEY', '').strip()
    if not api_key:
        raise ValueError("Gemini API key not configured. Set GEMINI_API_KEY in your .env file.")
    return api_key

async def _send_gemini_request(api_key: str, model: str, json_content: dict) -> Optional[Dict]:
    """
    Send an asynchronous request to the Gemini generateContent endpoint.

    Args:
        api_key (str): The Gemini API key.
        model (str): The name of the model to use.
        json_content (dict): The request payload to send to the API.

    Returns:
        Dict: The JSON response from the API, or None if the request fails.
    """
    url = f"{GEMINI_BASE_URL}/{model}:generateContent"
    headers = {"Content-Type": "application/json"}

    # Initialize the client session with a timeout
    timeout = aiohttp.ClientTimeout(total=GEMINI_MAX_CLIENT_TIMEOUT_SEC)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        try:
            async with session.post(url, params={'key': api_key}, headers=headers, json=json_content) as response:
                if response.status != 200:
                    logger.error(f"_send_gemini_request: Request failed - Code {response.status} {response.reason}")
                    return None

                return await response.json()

        # Handle client errors, timeouts and malformed JSON bodies
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error("_send_gemini_request: Client error occurred: %s", e)
            return None

def _validate_gemini_response(response: Optional[Dict], parts: List[Dict]) -> Dict:
    """
    Checks if the Gemini API response indicates a failed request.

    Args:
        response (Dict): The API response to validate.
        parts (List[Dict]): The original content parts that generated this response.

    Returns:
        Dict: A dictionary containing a success flag, original parts, the response data
              and the reply text when present.
    """
    # Check if the response is empty
    if not response:
        return {'success': False, 'parts': parts, 'response': {}, 'text': None}

    # Check if the response did not succeed
    if 'error' in response:
        error_message = response.get('error', {}).get('message', 'Unknown error occurred')
        logger.error(f"_validate_gemini_response: API request failed: {error_message}")
        return {'success': False, 'parts': parts, 'response': response, 'text': None}

    # Reply text lives at candidates[0].content.parts[0].text
    try:
        text = response['candidates'][0]['content']['parts'][0]['text']
    except (KeyError, IndexError, TypeError):
        logger.error("_validate_gemini_response: No candidate text found in api response")
        return {'success': False, 'parts': parts, 'response': response, 'text': None}

    return {'success': True, 'parts': parts, 'response': response, 'text': text}

def prompt_gemini_single(parts: List[Dict], model: str = GEMINI_MODEL) -> Dict:
    """
    Send one prompt to the Gemini API.

    Args:
        parts (List[Dict]): Content parts, e.g. [{'text': ...}, {'inline_data': {...}}].
        model (str, optional): The model name. Defaults to the configured model.

    Returns:
        Dict: A processed API response containing a success flag,
              the original parts, the response dictionary and the reply text.

    Raises:
        ValueError: If the API key is missing. No request is made in that case.
    """
    api_key = get_api_key()

    logger.info(f"prompt_gemini_single: Sending request to '{model}'")
    payload = {'contents': [{'parts': parts}]}
    response = asyncio.run(_send_gemini_request(api_key, model, payload))
    return _validate_gemini_response(response, parts)
