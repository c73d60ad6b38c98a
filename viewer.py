# viewer.py
from flask import Flask, render_template, send_from_directory
from datetime import date
import argparse
import json
import logging

from settings import Config, configure_logging

logger = logging.getLogger(__name__)

# One page per specialty; the template name matches the specialty
ESPECIALIDADES = ('ortopedista', 'casa_rosa', 'psiquiatra', 'exames_gerais')

app = Flask(
    __name__,
    static_folder=str(Config.VIEWER_PUBLIC_DIR),
    static_url_path='',
    template_folder='templates',
)
DATA_DIR = Config.VIEWER_DATA_DIR


def calcular_idade(data_nascimento, hoje=None):
    """Age in completed years for a DD/MM/YYYY birth date, or '-' when it can't be computed."""
    if not data_nascimento or data_nascimento == '-':
        return '-'
    try:
        partes = data_nascimento.split('/')
        if not all(p.isascii() and p.isdigit() for p in partes):
            return '-'
        dia, mes, ano = (int(p) for p in partes)
        nasc = date(ano, mes, dia)
    except (ValueError, TypeError, AttributeError):
        return '-'

    hoje = hoje or date.today()
    idade = hoje.year - nasc.year
    if (hoje.month, hoje.day) < (nasc.month, nasc.day):
        idade -= 1
    return str(idade)


def load_pacientes(especialidade):
    """Read data/<especialidade>.json. Any failure is logged and yields an empty list."""
    path = DATA_DIR / f'{especialidade}.json'
    try:
        with path.open(encoding='utf-8') as f:
            pacientes = json.load(f)
    except (OSError, ValueError):
        logger.exception('Erro ao ler %s', path.name)
        return []
    if not isinstance(pacientes, list):
        logger.warning('%s is not a JSON array, ignoring', path.name)
        return []
    return pacientes


def titulo(especialidade):
    return especialidade.replace('_', ' ', 1).upper()


def make_specialty_view(especialidade):
    def view():
        pacientes = [
            dict(p, idade=calcular_idade(p.get('data_nascimento')))
            for p in load_pacientes(especialidade)
            if isinstance(p, dict)
        ]
        return render_template(
            f'{especialidade}.html',
            especialidade=titulo(especialidade),
            pacientes=pacientes,
        )
    view.__name__ = especialidade
    return view


for _especialidade in ESPECIALIDADES:
    app.add_url_rule(f'/{_especialidade}', view_func=make_specialty_view(_especialidade))


@app.route('/')
def index():
    return send_from_directory(app.static_folder, 'index.html')


def main(argv=None):
    parser = argparse.ArgumentParser(description='Static per-specialty patient viewer')
    parser.add_argument('--port', type=int, default=Config.VIEWER_PORT)
    parser.add_argument('--debug', action='store_true')
    args = parser.parse_args(argv)

    configure_logging()
    if not DATA_DIR.exists():
        logger.warning('%s not found. Specialty pages will render empty until it is provided.', DATA_DIR)
    logger.info('Servidor rodando em http://localhost:%s', args.port)
    app.run(port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
