from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

_NO_CACHE_HEADERS = {
    'Cache-Control': 'no-store, no-cache, must-revalidate, proxy-revalidate',
    'Pragma': 'no-cache',
    'Expires': '0',
    'Surrogate-Control': 'no-store',
}


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Arena game server!'})


@main.route('/api/world')
def world_state():
    """Read-only view of the authoritative world, for debugging and tooling."""
    game = current_app.extensions['arena']
    state = game.world.snapshot()
    state['leaderboard'] = game.leaderboard()
    return jsonify(state)


@main.app_errorhandler(404)
def not_found(error):
    return 'Not Found', 404, {'Content-Type': 'text/plain; charset=utf-8'}


@main.after_app_request
def security_headers(response):
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['X-XSS-Protection'] = '1; mode=block'
    for name, value in _NO_CACHE_HEADERS.items():
        response.headers[name] = value
    response.headers['X-Powered-By'] = current_app.config.get('POWERED_BY', 'PHP 7.4.3')
    return response
