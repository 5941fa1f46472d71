"""
Client data layer - equivalente Python do código de dados do front end
Proxy client, cache offline, cache de consultas e preferências do usuário
"""
