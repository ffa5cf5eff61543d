"""
NATE Web API — Flask backend for rendering clients.

Provides REST endpoints for:
- /api/annotate — Annotate a narrative, returning the structured payload
- /api/health — Liveness and version
"""

from flask import Flask, jsonify, request
from flask_cors import CORS

from nate import __version__
from nate.core.context import AnnotateRequest
from nate.core.engine import get_engine
from nate.core.logging import LogChannel, get_logger
from nate.output.structured import build_structured_output

app = Flask(__name__)
CORS(app)

log = get_logger(LogChannel.SYSTEM)


# =============================================================================
# API Routes
# =============================================================================

@app.route('/api/health', methods=['GET'])
def health():
    """Report that the service is up."""
    return jsonify({'status': 'ok', 'version': __version__})


@app.route('/api/annotate', methods=['POST'])
def annotate():
    """Annotate a narrative into sections, tokens and timeline."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    text = data.get('narrative', data.get('answer', ''))

    if not isinstance(text, str) or not text.strip():
        return jsonify({'error': 'No narrative provided'}), 400

    try:
        result = get_engine().annotate(AnnotateRequest(text=text))
        structured = build_structured_output(result)
        return jsonify(structured.model_dump(mode='json'))

    except Exception as e:
        log.error("annotate_request_failed", error=str(e), error_type=type(e).__name__)
        return jsonify({'error': str(e)}), 500


if __name__ == '__main__':
    print("NATE Web API starting...")
    print("   Open: http://localhost:5050")
    app.run(debug=True, port=5050, use_reloader=False)
