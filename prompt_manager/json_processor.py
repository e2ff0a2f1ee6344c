import json
import jsonschema

def extract_json(llm_response: str, json_start: str = '[', json_end: str = ']') -> dict | list | None:
    """
    Extract and parse JSON from a free-form LLM response.

    Takes the span from the first occurrence of json_start to the last
    occurrence of json_end, so nested brackets stay inside the match.

    Args:
        llm_response (str): The response from an LLM containing JSON.
        json_start (str): The opening delimiter, '[' or '{'.
        json_end (str): The closing delimiter, ']' or '}'.

    Returns:
        dict | list | None: Parsed JSON if found and valid, None otherwise.
    """
    if not llm_response:
        return None

    start = llm_response.find(json_start)
    end = llm_response.rfind(json_end)
    if start == -1 or end == -1 or end < start:
        return None

    try:
        return json.loads(llm_response[start:end + len(json_end)])
    except json.JSONDecodeError:
        return None

def compare_json(data: dict | list, schema: dict) -> bool:
    """
    Compare a JSON object with a JSON schema.

    Args:
        data (dict | list): The JSON value to validate.
        schema (dict): The JSON schema to validate against.

    Returns:
        bool: True if the data matches the schema, False otherwise.
    """
    try:
        jsonschema.validate(instance=data, schema=schema)
        return True
    except jsonschema.exceptions.ValidationError:
        return False
