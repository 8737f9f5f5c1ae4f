# wsgi.py
from badgescan import config
from badgescan.main import create_app

app = create_app()

# Optionnel : permet de lancer le serveur manuellement en local
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=config.PORT)
