"""Settings Domain - global slot template and per-valet rotas"""
