import sqlalchemy as sa
import sqlalchemy.orm as so
from dugout import create_app, db
from dugout.models import Player, Park, Tournament, TournamentInvitation, Document, LodgingOption
import os

app = create_app(os.getenv('FLASK_CONFIG') or 'development')

@app.shell_context_processor
def make_shell_context():
    return {
        'sa': sa,
        'so': so,
        'db': db,
        'Player': Player,
        'Park': Park,
        'Tournament': Tournament,
        'TournamentInvitation': TournamentInvitation,
        'Document': Document,
        'LodgingOption': LodgingOption,
    }

if __name__ == '__main__':
    app.run(debug=True)
