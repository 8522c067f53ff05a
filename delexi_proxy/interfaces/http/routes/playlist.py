"""Read-only Spotify playlist proxy route."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request

from delexi_proxy.domain.catalog import PlaylistService

logger = logging.getLogger(__name__)

playlist_bp = Blueprint('playlist_bp', __name__, url_prefix='/api/playlist')


def get_playlist_service() -> PlaylistService:
    return current_app.extensions['playlist_service']


@playlist_bp.route('/<string:playlist_id>', methods=['GET'])
def get_playlist(playlist_id: str):
    """
    Return the slim playlist for a Spotify playlist id.

    The optional ``market`` query parameter selects the region; unknown codes
    fall back to the configured default. Upstream errors keep their status
    code, anything else is a 500 with the error text.
    """
    market = request.args.get('market')
    try:
        outcome = get_playlist_service().fetch_playlist(playlist_id, market)
        payload, status = outcome.to_response()
    except Exception as e:
        logger.exception(f"Error fetching playlist {playlist_id}: {e}")
        return jsonify({"error": str(e)}), 500
    return jsonify(payload), status


__all__ = ['playlist_bp']
