from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from arena.config import Config

# Each client's events are handled in order on its own connection; separate
# clients still run concurrently.
socketio = SocketIO(async_mode=None, async_handlers=False)


def create_app(config_class=Config, rng=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    origins = flask_app.config.get('CORS_ORIGINS', '*')
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    CORS(flask_app, origins=origins)

    socketio.init_app(flask_app, cors_allowed_origins=origins)

    # One world per app, so every app (and every test) starts from scratch
    from arena.game import Game
    game = Game(socketio, namespace=namespace, rng=rng, logger=flask_app.logger)
    game.start(flask_app.config.get('INITIAL_COLLECTIBLES', 1))
    flask_app.extensions['arena'] = game

    from arena.main import main
    flask_app.register_blueprint(main)

    # Handlers bind to the server created by init_app above
    from arena.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    @click.command('serve')
    @click.option('--host', default=None, help='Interface to bind (defaults to HOST).')
    @click.option('--port', default=None, type=int, help='Port to listen on (defaults to PORT).')
    def serve_command(host, port):
        """Runs the Socket.IO game server."""
        host = host or flask_app.config['HOST']
        port = port or flask_app.config['PORT']
        click.echo(f'Listening on port {port}')
        socketio.run(flask_app, host=host, port=port, allow_unsafe_werkzeug=True)

    flask_app.cli.add_command(serve_command)

    return flask_app
