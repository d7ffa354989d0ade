import logging

from flask import Flask, request, jsonify

from read_feedback import config
from read_feedback.errors import ConfigurationError, ScoringServiceError
from read_feedback.logging_config import configure_logging
from read_feedback.pipeline import build_reading_feedback
from read_feedback.speechace.client import SpeechAceClient

configure_logging()
logger = logging.getLogger("read_feedback.api")

app = Flask(__name__)


def get_scoring_client():
    """Scoring client built from the environment (patched in tests)."""
    return SpeechAceClient.from_config()


def _feedback_payload(text, speechace):
    feedback = build_reading_feedback(text, speechace)
    payload = feedback.to_dict()
    payload["text"] = text
    return payload

# ============================================================================
# ROUTES - HEALTH
# ============================================================================
@app.route('/health')
def health():
    return jsonify({"status": "ok"})

# ============================================================================
# ROUTES - SCORING PROXY
# ============================================================================
@app.route('/api/score', methods=['POST'])
def score():
    """Forward a reading to the scoring service and return aligned feedback."""
    if 'audio' not in request.files:
        return jsonify({"error": "Missing audio file."}), 400

    file = request.files['audio']
    text = (request.form.get('text') or '').strip()
    if not text.split():
        return jsonify({"error": "Reference text is required."}), 400

    dialect = config.resolve_dialect(request.form.get('dialect'))
    content_type = file.mimetype or "application/octet-stream"

    try:
        client = get_scoring_client()
        speechace = client.score_text(file.read(), text, dialect, content_type=content_type)
    except ConfigurationError as e:
        logger.error("Scoring is not configured: %s", e)
        return jsonify({"error": str(e)}), 500
    except ScoringServiceError as e:
        return jsonify({"error": str(e)}), 502

    payload = _feedback_payload(text, speechace)
    payload.update({"ok": True, "task": "reading", "dialect": dialect, "speechace": speechace})
    return jsonify(payload)

# ============================================================================
# ROUTES - FEEDBACK
# ============================================================================
@app.route('/api/feedback', methods=['POST'])
def feedback():
    """Re-align a stored scoring response against its reference text."""
    data = request.get_json(silent=True) or {}
    text = data.get('text')
    if not isinstance(text, str) or not text.strip():
        return jsonify({"error": "Reference text is required."}), 400

    return jsonify(_feedback_payload(text, data.get('speechace')))

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
