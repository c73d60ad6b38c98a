# app.py
from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from functools import wraps
import argparse
import logging

import models
import sheets
from settings import Config, configure_logging

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)
app.json.ensure_ascii = False

# Loaded once at startup; validators and config routes share this instance
taxonomy = models.load_taxonomy()

ERRO_INTERNO = {'success': False, 'error': 'Erro interno'}


def _json_body():
    """Request body as a dict; anything that is not a JSON object counts as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def validate_input(field, allowed_values):
    """Reject the request with 400 when `field` is present but not in `allowed_values`."""
    allowed_values = tuple(allowed_values)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            data = _json_body()
            value = data.get(field)
            if value and value not in allowed_values:
                return jsonify({
                    'error': f"Valor inválido para {field}. Valores permitidos: {', '.join(allowed_values)}"
                }), 400
            return view(*args, **kwargs)
        return wrapper
    return decorator


@app.errorhandler(HTTPException)
def handle_http_error(e):
    return jsonify({'error': e.name}), e.code


# Create exam
@app.route('/exames', methods=['POST'])
@validate_input('especialidade', taxonomy.especialidades)
@validate_input('tipo_exame', taxonomy.tipos_exame())
def create_exame():
    data = _json_body()
    try:
        client = sheets.get_auth_client()
        row = models.build_exam_row(data)
        sheets.append_row(client, row)
        logger.info('exame %s appended (%s)', row[0], row[4])
        return jsonify({'success': True, 'data': row}), 201
    except Exception:
        logger.exception('create exame failed')
        return jsonify(ERRO_INTERNO), 500


# List exams, optionally filtered by especialidade and status
@app.route('/exames', methods=['GET'])
def list_exames():
    try:
        client = sheets.get_auth_client()
        rows = sheets.get_sheet_data(client)
    except Exception:
        logger.exception('list exames failed')
        return jsonify(ERRO_INTERNO), 500
    exames = [models.row_to_exame(r) for r in rows]
    filtered = models.filtrar_exames(
        exames,
        especialidade=request.args.get('especialidade'),
        status=request.args.get('status'),
    )
    return jsonify({'success': True, 'data': filtered})


@app.route('/especialidades', methods=['GET'])
def especialidades():
    return jsonify(taxonomy.especialidades_json())


@app.route('/tipos-exame', methods=['GET'])
def tipos_exame():
    return jsonify(taxonomy.exames_json())


def main(argv=None):
    parser = argparse.ArgumentParser(description='Exam records service backed by Google Sheets')
    parser.add_argument('--port', type=int, default=Config.PORT)
    parser.add_argument('--debug', action='store_true')
    args = parser.parse_args(argv)

    configure_logging()
    if not Config.SPREADSHEET_ID:
        logger.warning('SPREADSHEET_ID not set. /exames will answer 500 until it is provided.')
    if not Config.GOOGLE_CREDENTIALS:
        logger.warning('GOOGLE_CREDENTIALS not set. /exames will answer 500 until it is provided.')
    logger.info('Servidor rodando na porta %s', args.port)
    logger.info('Total de especialidades: %d', len(taxonomy.especialidades))
    logger.info('Endpoints: POST /exames, GET /exames, GET /especialidades, GET /tipos-exame')
    app.run(host='0.0.0.0', port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
