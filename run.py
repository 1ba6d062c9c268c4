from highscores import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # TLS termination belongs to the reverse proxy in front of this server
    socketio.run(app, host='0.0.0.0', port=3000)
