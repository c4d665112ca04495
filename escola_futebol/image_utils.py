from PIL import Image, UnidentifiedImageError
import io
import logging


def process_avatar_image(file_stream, max_size=(500, 500), quality=85):
    """
    Redimensiona e comprime a foto de um aluno.

    :param file_stream: O stream de bytes do arquivo de imagem.
    :param max_size: Uma tupla (width, height) com o tamanho máximo.
    :param quality: A qualidade da compressão JPEG (0-100).
    :return: Um BytesIO com a imagem processada e seu content type,
             ou (None, None) se o arquivo não for uma imagem.
    """
    try:
        img = Image.open(file_stream)

        # Paletas (GIF) e canal alfa (PNG) não existem em JPEG
        if img.mode in ('P', 'RGBA', 'LA'):
            img = img.convert('RGB')

        # Mantém a proporção
        img.thumbnail(max_size, Image.Resampling.LANCZOS)

        img_byte_arr = io.BytesIO()
        img.save(img_byte_arr, format='JPEG', quality=quality, optimize=True)
        img_byte_arr.seek(0)
        return img_byte_arr, 'image/jpeg'

    except (UnidentifiedImageError, OSError) as e:
        logging.error(f"Erro ao processar imagem: {e}")
        return None, None


def process_logo_image(file_stream, max_size=(400, 400)):
    """Logo da escola: PNG para preservar a transparência."""
    try:
        img = Image.open(file_stream)
        if img.mode not in ('RGB', 'RGBA'):
            img = img.convert('RGBA')
        img.thumbnail(max_size, Image.Resampling.LANCZOS)

        img_byte_arr = io.BytesIO()
        img.save(img_byte_arr, format='PNG', optimize=True)
        img_byte_arr.seek(0)
        return img_byte_arr, 'image/png'

    except (UnidentifiedImageError, OSError) as e:
        logging.error(f"Erro ao processar logo: {e}")
        return None, None
