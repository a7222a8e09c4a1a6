"""
AWS Lambda entry point for the Terraform Drift Analyser.
"""

import json

from .config import load_config
from .drift_analyser import detect_drift
from .drift_analyser.errors import DriftAnalyserError
from .utils import setup_logging


def _response(status_code: int, body: dict) -> dict:
    return {
        "statusCode": status_code,
        "body": json.dumps(body),
        "headers": {"Content-Type": "application/json"},
    }


def lambda_handler(event: dict, context: object) -> dict:
    """
    AWS Lambda handler function.

    Args:
        event: Lambda event data
        context: Lambda context

    Returns:
        Dictionary with statusCode and body containing the analysis
    """
    logger = setup_logging()
    try:
        # Load and validate configuration
        config = load_config()
        logger = setup_logging(config.log_level)
        logger.info("Starting Terraform drift analysis")

        analysis = detect_drift(config)

        logger.info(
            f"Drift analysis completed. In sync: {analysis.is_sync()}"
        )
        for resource in analysis.drifted_resources():
            logger.info(f"Drifted resource: {resource.key()}")
        body = analysis.to_dict()
        body["drift_detected"] = not analysis.is_sync()
        return _response(200, body)

    except ValueError as e:
        # Configuration or validation errors
        logger.error(f"Configuration error: {str(e)}")
        return _response(400, {"error": "Configuration error", "message": str(e)})

    except DriftAnalyserError as e:
        logger.error(f"Drift analysis failed: {str(e)}")
        return _response(500, {"error": "Drift analysis failed", "message": str(e)})

    except Exception as e:
        # Unexpected errors
        logger.error(f"Unexpected error: {str(e)}")
        return _response(500, {"error": "Internal server error", "message": str(e)})
