from django.urls import path
from . import views

urlpatterns = [
    path('puzzle/today/', views.today_puzzle, name="today-puzzle"),
    path('solutions/', views.cell_solutions, name="cell-solutions"),
    path('validate/', views.validate_guess, name="validate-guess"),
]
