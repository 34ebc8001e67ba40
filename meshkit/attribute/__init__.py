"""Typed attribute bags, layered mutable bags, and the list and string-map values they hold."""