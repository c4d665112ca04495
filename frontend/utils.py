# frontend/utils.py

from datetime import date, datetime

import requests
from flask import session, current_app

from escola_futebol.relatorios import formatar_moeda  # noqa: F401


def api_request(endpoint, method='GET', data=None, files=None, json=None, params=None, headers=None):
    """
    Função auxiliar para fazer requisições à API FastAPI, incluindo o token de autenticação.
    Devolve a resposta, ou None se a API estiver inacessível.
    """
    api_base_url = current_app.config.get('API_BASE_URL', 'http://localhost:8000/api')
    timeout = current_app.config.get('API_TIMEOUT', 10)
    url = f"{api_base_url}{endpoint}"

    request_headers = headers if headers is not None else {}
    if 'access_token' in session and 'Authorization' not in request_headers:
        request_headers['Authorization'] = f"Bearer {session['access_token']}"

    try:
        if method == 'GET':
            response = requests.get(url, timeout=timeout, params=params, headers=request_headers)
        elif method == 'POST':
            response = requests.post(url, data=data, files=files, json=json, timeout=timeout, headers=request_headers)
        elif method == 'PUT':
            response = requests.put(url, data=data, files=files, json=json, timeout=timeout, headers=request_headers)
        elif method == 'DELETE':
            response = requests.delete(url, timeout=timeout, headers=request_headers)
        else:
            return None

        # Token expirado ou inválido: força um novo login
        if response.status_code == 401:
            session.clear()

        current_app.logger.info(f"API Request: {method} {url} - Status: {response.status_code}")
        return response

    except requests.exceptions.RequestException as e:
        current_app.logger.error(f"Erro na requisição {method} {url}: {e}")
        return None


def mensagem_erro(acao):
    """Mensagem única para qualquer falha de requisição."""
    return f"Erro ao {acao}. Tente novamente."


def _normalizar(valor):
    if isinstance(valor, bool):
        return "true" if valor else "false"
    if valor is None:
        return ""
    return str(valor)


def valor_campo(registro, caminho):
    """
    Lê um campo possivelmente aninhado: valor_campo(aluno, "filial.nome").
    """
    valor = registro
    for parte in caminho.split("."):
        if not isinstance(valor, dict):
            return None
        valor = valor.get(parte)
    return valor


def filtrar_registros(registros, busca="", campos_busca=("nome",), **filtros):
    """
    Busca por trecho (sem diferenciar maiúsculas) em qualquer um dos
    ``campos_busca`` e filtros de igualdade para os demais parâmetros.
    Filtros vazios ou "todos" são ignorados.
    """
    termo = (busca or "").strip().lower()
    filtros = {k: _normalizar(v) for k, v in filtros.items() if v not in (None, "", "todos", "todas")}

    resultado = []
    for registro in registros:
        if termo and not any(termo in _normalizar(valor_campo(registro, c)).lower() for c in campos_busca):
            continue
        if any(_normalizar(valor_campo(registro, k)) != v for k, v in filtros.items()):
            continue
        resultado.append(registro)
    return resultado


def para_data(valor):
    if not valor:
        return None
    if isinstance(valor, date):
        return valor
    try:
        return datetime.fromisoformat(str(valor).replace('Z', '+00:00')).date()
    except ValueError:
        return None
