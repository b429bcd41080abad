"""Valets Domain - valet records, their default rota and holidays"""
