"""
Arredondamento usado em todas as temperaturas e velocidades exibidas

Empates sobem em direção a +infinito (20.5 -> 21, -2.5 -> -2), diferente do
round() nativo do Python que usa arredondamento bancário.
"""
import math


def round_half_up(value: float) -> int:
    """Arredonda para o inteiro mais próximo, empates para cima"""
    return int(math.floor(value + 0.5))


def round_to_tenth(value: float) -> float:
    """Arredonda para 1 casa decimal com a mesma regra de empate"""
    return round_half_up(value * 10) / 10
