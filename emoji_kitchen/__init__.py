"""
Emoji Kitchen: client and proxy for https://emojik.vercel.app

- service.py: builds /s/{emoji1}_{emoji2}?size=N, sends one GET, decodes the image
- errors.py: SizeOutOfRange, BadURL, NetworkError, ImageDecodeError
- config.py: config/params.yaml + EMOJI_KITCHEN_* environment overrides
- server.py: FastAPI proxy with /health and /combine
"""
