import click

from promptparty import create_app, socketio

app = create_app()


@click.command()
@click.option('--host', default='0.0.0.0', show_default=True, help='Interface to bind.')
@click.option('--port', default=None, type=int, help='Port to listen on (defaults to PORT config).')
@click.option('--debug', is_flag=True, help='Run with the Flask debugger and reloader.')
def serve(host, port, debug):
    """Start the prompt party Socket.IO server."""
    port = port or app.config['PORT']
    app.logger.info(f"[serve] listening at {host}:{port}")
    # Use SocketIO server to enable websockets in dev
    socketio.run(app, host=host, port=port, debug=debug, allow_unsafe_werkzeug=True)


if __name__ == '__main__':
    serve()
