from arena import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server to enable websockets in dev
    port = app.config['PORT']
    app.logger.info(f"Listening on port {port}")
    socketio.run(app, host=app.config['HOST'], port=port, allow_unsafe_werkzeug=True)
