from flask import Flask, request, jsonify
from flask_cors import CORS
from rerate_engine import BillProcessor
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (the sign-up UI calls the API from the browser)
CORS(app)

# Initialize the bill processor
processor = BillProcessor()


def _holder_name(data) -> str:
    bill = data.get('bill', data)
    return bill.get('account_holder_name') or 'Unknown'


def _run(operation):
    """Parse the JSON body, run an engine operation and map errors to responses."""
    try:
        input_data = request.get_json(force=True, silent=True)

        if not input_data:
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        holder = _holder_name(input_data)
        logger.info(f"Processing bill for: {holder}")

        result = operation(input_data)

        logger.info(f"Bill processed successfully: {holder}")

        return jsonify(result), 200

    except (ValueError, KeyError, TypeError, AttributeError) as e:
        # Validation errors from engine
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Rerate Assistant Pricing API",
        "version": "1.0",
        "endpoints": {
            "process_bill": "/process_bill [POST]",
            "apply_event": "/apply_event [POST]",
            "export": "/export [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/process_bill", methods=["POST"])
def process_bill():
    """
    Reprice a bill and return its opportunities and commissions
    """
    return _run(processor.process_from_dict)


@app.route("/apply_event", methods=["POST"])
def apply_event():
    """
    Apply one roster or account edit, then return the processed bill
    """
    return _run(processor.apply_event_from_dict)


@app.route("/export", methods=["POST"])
def export():
    """
    Build the exported summary document
    """
    return _run(processor.export_from_dict)


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
