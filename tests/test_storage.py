"""Testes do armazenamento local de arquivos."""

import io

from escola_futebol import storage


def test_nome_seguro_remove_caracteres_estranhos():
    nome = storage.nome_seguro("aluno_1", "../minha foto (1).png", ".jpg")
    assert nome.startswith("aluno_1_")
    assert nome.endswith("_minha_foto__1_.jpg")
    assert "/" not in nome


def test_salvar_e_remover_localmente(tmp_path, monkeypatch):
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path))

    url = storage.salvar_arquivo(io.BytesIO(b"conteudo"), "teste.txt", "text/plain")

    assert url == "/uploads/teste.txt"
    assert (tmp_path / "teste.txt").read_bytes() == b"conteudo"
    assert storage.remover_arquivo(url) is True
    assert not (tmp_path / "teste.txt").exists()


def test_remover_arquivo_inexistente(tmp_path, monkeypatch):
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path))
    assert storage.remover_arquivo("/uploads/nao-existe.txt") is False
    assert storage.remover_arquivo("https://outro.site/arquivo.txt") is False
    assert storage.remover_arquivo(None) is False


def test_usa_bucket_quando_configurado(monkeypatch):
    for variavel, valor in {
        "S3_ENDPOINT_URL": "https://r2.exemplo.com",
        "AWS_ACCESS_KEY_ID": "chave",
        "AWS_SECRET_ACCESS_KEY": "segredo",
        "S3_BUCKET_NAME": "escola",
        "PUBLIC_BUCKET_URL": "https://arquivos.exemplo.com/",
    }.items():
        monkeypatch.setenv(variavel, valor)

    enviados = []

    class ClienteFalso:
        def upload_fileobj(self, fileobj, bucket, nome, ExtraArgs=None):
            enviados.append((bucket, nome, ExtraArgs))

    monkeypatch.setattr(storage, "_s3_client", lambda config: ClienteFalso())

    url = storage.salvar_arquivo(io.BytesIO(b"x"), "foto.jpg", "image/jpeg")

    assert url == "https://arquivos.exemplo.com/foto.jpg"
    assert enviados == [("escola", "foto.jpg", {"ContentType": "image/jpeg"})]
