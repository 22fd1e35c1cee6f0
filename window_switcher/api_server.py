"""Lightweight local HTTP API for switcher clients."""

from typing import Optional
import threading
from flask import Flask, request, jsonify

from .commands import VERBS
from .exceptions import StorageError
from .search import search
from .session import SwitcherSession
from .switcher import Switcher


_app_instance: Optional[Flask] = None
_server_thread: Optional[threading.Thread] = None


def create_app(switcher: Switcher, session: SwitcherSession, search_threshold: float = 30.0) -> Flask:
	app = Flask("window_switcher_api")

	# Basic CORS for local file:// clients
	@app.after_request
	def add_cors_headers(response):
		response.headers["Access-Control-Allow-Origin"] = "*"
		response.headers["Access-Control-Allow-Methods"] = "GET, POST, DELETE, OPTIONS"
		response.headers["Access-Control-Allow-Headers"] = "Content-Type"
		return response

	@app.get("/health")
	def health():
		return jsonify({"status": "ok"})

	@app.get("/apps")
	def running_apps():
		"""Live fast query (written through to the cache)."""
		apps = switcher.get_running_apps()
		return jsonify({"apps": [a.to_dict() for a in apps]})

	@app.get("/apps/cached")
	def cached_apps():
		apps = switcher.get_cached_running_apps()
		return jsonify({"apps": [a.to_dict() for a in apps] if apps is not None else None})

	@app.get("/minimized")
	def minimized():
		return jsonify({"minimized": switcher.get_minimized_status()})

	@app.get("/view")
	def view():
		"""Current partition, optionally filtered by ?q= and reordered by ?order=."""
		partition = session.view(order=request.args.get("order") or None)
		text = request.args.get("q", "") or ""
		body = partition.to_dict()
		if text.strip():
			matches = search(partition.all_items(), text, threshold=search_threshold)
			body = {"results": [item.to_dict() for item in matches]}
		body["loading"] = session.is_loading
		return jsonify(body)

	@app.route("/refresh", methods=["POST", "OPTIONS"])
	def refresh():
		if request.method == "OPTIONS":
			return ("", 204)
		generation = session.refresh()
		return jsonify({"status": "ok", "generation": generation})

	@app.route("/excluded", methods=["GET", "POST", "OPTIONS"])
	def excluded():
		if request.method == "OPTIONS":
			return ("", 204)
		if request.method == "GET":
			return jsonify({"excluded": switcher.exclusions.ordered()})
		data = request.get_json(silent=True)
		if not isinstance(data, dict):
			data = {}
		bundle_id = str(data.get("bundleId", "")).strip()
		if not bundle_id:
			return jsonify({"status": "error", "message": "missing bundleId"}), 400
		try:
			switcher.add_excluded_app(bundle_id)
		except StorageError as e:
			return jsonify({"status": "error", "message": str(e)}), 500
		return jsonify({"status": "ok"})

	@app.route("/excluded/<bundle_id>", methods=["DELETE", "OPTIONS"])
	def include(bundle_id):
		if request.method == "OPTIONS":
			return ("", 204)
		try:
			switcher.remove_excluded_app(bundle_id)
		except StorageError as e:
			return jsonify({"status": "error", "message": str(e)}), 500
		return jsonify({"status": "ok"})

	@app.route("/actions/<verb>", methods=["POST", "OPTIONS"])
	def action(verb):
		"""Run one action. Responds with close=true when the client should go away."""
		if request.method == "OPTIONS":
			return ("", 204)
		if verb not in VERBS:
			return jsonify({"success": False, "error": f"Unknown action: {verb}", "close": False}), 404
		data = request.get_json(silent=True)
		if not isinstance(data, dict):
			data = {}
		item = data.get("item")
		if not isinstance(item, dict):
			return jsonify({"success": False, "error": "missing item", "close": False}), 400
		result, should_close = session.perform(verb, item)
		status = 200 if result.success else 500
		return jsonify({"success": result.success, "error": result.error, "close": should_close}), status

	return app


def start_api_server(switcher: Switcher, session: SwitcherSession, port: int = 8771, search_threshold: float = 30.0) -> None:
	"""
	Start the local API server in a background thread.
	Only binds to 127.0.0.1.
	"""
	global _app_instance, _server_thread
	if _server_thread and _server_thread.is_alive():
		return
	_app_instance = create_app(switcher, session, search_threshold)

	def run():
		_app_instance.run(host="127.0.0.1", port=port, debug=False, use_reloader=False)

	_server_thread = threading.Thread(target=run, daemon=True)
	_server_thread.start()
