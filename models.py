# models.py
import json
import time
from datetime import datetime, timezone
from functools import lru_cache
from types import MappingProxyType

from settings import Config

STATUS_PADRAO = 'Aguardando agendamento'

# Column order of the exam sheet (A..M). Reads and writes both depend on it.
COLUNAS_EXAME = [
    'id',
    'nome_paciente',
    'data_nascimento',
    'telefone',
    'especialidade',
    'tipo_exame',
    'sub_tipo_exame',
    'data_agendamento',
    'hora_agendamento',
    'status',
    'criado_em',
    'atualizado_em',
    'observacoes',
]

# Fields exposed by GET /exames
CAMPOS_LISTAGEM = ['id', 'nome_paciente', 'especialidade', 'tipo_exame', 'status', 'data_agendamento']


def _freeze(value):
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value):
    if isinstance(value, MappingProxyType):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


def _leaf_values(value):
    if isinstance(value, MappingProxyType):
        for v in value.values():
            yield from _leaf_values(v)
    elif isinstance(value, tuple):
        for v in value:
            yield from _leaf_values(v)
    else:
        yield value


class Taxonomy:
    """
    Read-only view of the taxonomy document (config.json): the allowed
    specialties and the exam types grouped by category.
    """

    def __init__(self, document):
        self._doc = _freeze(document)

    @property
    def especialidades(self):
        return self._doc.get('especialidades', ())

    @property
    def exames(self):
        return self._doc.get('exames', MappingProxyType({}))

    def tipos_exame(self):
        """Every exam type the document lists, imaging sub-kinds and laboratory tests alike."""
        return tuple(_leaf_values(self.exames))

    def especialidades_json(self):
        return _thaw(self.especialidades)

    def exames_json(self):
        return _thaw(self.exames)


@lru_cache(maxsize=1)
def load_taxonomy(path=None):
    path = path or Config.TAXONOMY_FILE
    with open(path, encoding='utf-8') as f:
        return Taxonomy(json.load(f))


def _agora_iso(agora=None):
    agora = agora or datetime.now(timezone.utc)
    return agora.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def build_exam_row(data, agora=None):
    """Build the 13-column sheet row for a new exam from a request body."""
    timestamp = _agora_iso(agora)
    return [
        data.get('id') or str(int(time.time() * 1000)),
        data.get('nome_paciente') or '',
        data.get('data_nascimento') or '',
        data.get('telefone') or '',
        data.get('especialidade') or '',
        data.get('tipo_exame') or '',
        data.get('sub_tipo_exame') or '',
        data.get('data_agendamento') or '',
        data.get('hora_agendamento') or '',
        data.get('status') or STATUS_PADRAO,
        timestamp,
        timestamp,
        data.get('observacoes') or '',
    ]


def row_to_exame(row):
    """Map a raw sheet row to the listing shape. Trailing empty cells may be absent."""
    out = {}
    for campo in CAMPOS_LISTAGEM:
        idx = COLUNAS_EXAME.index(campo)
        out[campo] = row[idx] if idx < len(row) else None
    return out


def filtrar_exames(exames, especialidade=None, status=None):
    return [
        e for e in exames
        if (not especialidade or e.get('especialidade') == especialidade)
        and (not status or e.get('status') == status)
    ]
