from student_api.main import run

run()
